"""Static synonym groups and topical word fields used by semantic scoring."""


SYNONYM_GROUPS: tuple[frozenset[str], ...] = (
    frozenset({"big", "large", "huge", "massive", "enormous", "gigantic"}),
    frozenset({"small", "tiny", "little", "mini", "minute", "petite"}),
    frozenset({"good", "great", "excellent", "amazing", "wonderful", "fantastic"}),
    frozenset({"bad", "terrible", "awful", "horrible", "dreadful", "poor"}),
    frozenset({"fast", "quick", "rapid", "speedy", "swift", "hasty"}),
    frozenset({"slow", "sluggish", "gradual", "leisurely", "unhurried"}),
    frozenset({"smart", "intelligent", "clever", "brilliant", "wise", "bright"}),
    frozenset({"easy", "simple", "straightforward", "effortless", "uncomplicated"}),
    frozenset({"hard", "difficult", "challenging", "tough", "complex", "complicated"}),
    frozenset({"beautiful", "gorgeous", "stunning", "attractive", "lovely", "pretty"}),
    frozenset({"machine", "device", "apparatus", "equipment", "instrument", "tool"}),
    frozenset({"method", "approach", "technique", "strategy", "procedure", "way"}),
    frozenset(
        {"analysis", "examination", "study", "investigation", "research", "review"}
    ),
    frozenset({"component", "element", "part", "module", "section", "piece"}),
    frozenset({"application", "program", "software", "tool", "system", "platform"}),
    frozenset({"create", "make", "build", "construct", "develop", "generate"}),
    frozenset({"important", "significant", "crucial", "vital", "essential", "critical"}),
    frozenset({"problem", "issue", "challenge", "difficulty", "obstacle", "concern"}),
)

SEMANTIC_FIELDS: dict[str, frozenset[str]] = {
    "technology": frozenset(
        {
            "computer",
            "software",
            "algorithm",
            "data",
            "digital",
            "code",
            "programming",
            "system",
            "network",
            "database",
        }
    ),
    "business": frozenset(
        {
            "company",
            "market",
            "customer",
            "profit",
            "revenue",
            "strategy",
            "management",
            "organization",
            "corporate",
            "enterprise",
        }
    ),
    "science": frozenset(
        {
            "research",
            "experiment",
            "hypothesis",
            "theory",
            "analysis",
            "methodology",
            "observation",
            "conclusion",
            "evidence",
            "study",
        }
    ),
    "education": frozenset(
        {
            "student",
            "teacher",
            "learning",
            "knowledge",
            "curriculum",
            "academic",
            "university",
            "education",
            "training",
            "instruction",
        }
    ),
    "health": frozenset(
        {
            "medical",
            "patient",
            "treatment",
            "diagnosis",
            "therapy",
            "healthcare",
            "clinical",
            "hospital",
            "medicine",
            "wellness",
        }
    ),
}
