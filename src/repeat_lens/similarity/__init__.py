"""Selection similarity engine exports."""

from .matcher import (
    SelectionAnalysis,
    analyze_selection,
    determine_selection_level,
    find_exact_matches,
    find_matches,
    find_semantic_matches,
    locate_selection,
    map_to_original_index,
)
from .scoring import (
    ScoringWeights,
    SimilarityBreakdown,
    blended_similarity,
    jaccard_similarity,
    levenshtein_distance,
    similarity_breakdown,
    word_overlap_similarity,
)

__all__ = [
    "ScoringWeights",
    "SelectionAnalysis",
    "SimilarityBreakdown",
    "analyze_selection",
    "blended_similarity",
    "determine_selection_level",
    "find_exact_matches",
    "find_matches",
    "find_semantic_matches",
    "locate_selection",
    "jaccard_similarity",
    "levenshtein_distance",
    "map_to_original_index",
    "similarity_breakdown",
    "word_overlap_similarity",
]
