"""Shared base types for detector definitions."""


from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Generic, Mapping, TypeVar, cast, get_args, get_origin

from repeat_lens.analysis import (
    AnalysisDocument,
    AnalysisOptions,
    DetectionLevel,
    Repetition,
)


@dataclass
class DetectorConfig:
    """Base config container inherited by concrete detector configs."""

    def to_dict(self) -> dict[str, object]:
        """Serialize the config dataclass to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(
        cls: type["ConfigFromDictT"], raw: Mapping[str, object]
    ) -> "ConfigFromDictT":
        """Instantiate a config dataclass from a plain dictionary."""
        return cls(**dict(raw))


ConfigT = TypeVar("ConfigT", bound=DetectorConfig)
ConfigFromDictT = TypeVar("ConfigFromDictT", bound=DetectorConfig)
DetectorFromDictT = TypeVar("DetectorFromDictT", bound="Detector[DetectorConfig]")


class Detector(ABC, Generic[ConfigT]):
    """Base detector exposing a forward pass over one detection level."""

    name: str = "detector"
    level: DetectionLevel = DetectionLevel.PARAGRAPH

    def __init__(self, config: ConfigT) -> None:
        """Initialize a detector with explicit configuration."""
        self.config = config

    def to_dict(self) -> dict[str, object]:
        """Serialize this detector's config as a plain dictionary."""
        return self.config.to_dict()

    @classmethod
    def from_dict(
        cls: type["DetectorFromDictT"], raw: Mapping[str, object]
    ) -> "DetectorFromDictT":
        """Instantiate a detector from a plain config dictionary."""
        config_type = cls._resolve_config_type()
        config = config_type.from_dict(raw)
        return cls(config)

    @classmethod
    def _resolve_config_type(cls) -> type[DetectorConfig]:
        """Infer the concrete config type from ``Detector[Config]`` inheritance."""
        for base in getattr(cls, "__orig_bases__", ()):
            if get_origin(base) is Detector:
                args = get_args(base)
                if len(args) != 1:
                    break
                config_type = args[0]
                if isinstance(config_type, type) and issubclass(
                    config_type, DetectorConfig
                ):
                    return cast(type[DetectorConfig], config_type)
                break
        raise TypeError(
            f"Could not infer config type for detector class {cls.__name__}. "
            "Ensure it subclasses Detector[ConcreteConfig]."
        )

    @abstractmethod
    def forward(
        self, document: AnalysisDocument, options: AnalysisOptions
    ) -> list[Repetition]:
        """Enumerate spans, group them, and return ranked repeated groups."""

    @abstractmethod
    def example_repetitions(self) -> list[str]:
        """Return text samples that should produce at least one group."""

    @abstractmethod
    def example_non_repetitions(self) -> list[str]:
        """Return text samples that should produce no groups."""
