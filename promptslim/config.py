"""Configuration models for promptslim."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ConfigurationError
from .tokenizers import estimate_tokens


class CompressionLevel(str, Enum):
    """How much noise and duplication an engine may discard."""

    LOW = "low"
    MEDIUM = "medium"
    AGGRESSIVE = "aggressive"


# Presets per level, matching what the interactive tool shipped with
DEFAULT_MAX_ARRAY_SAMPLES: dict[CompressionLevel, int] = {
    CompressionLevel.LOW: 5,
    CompressionLevel.MEDIUM: 3,
    CompressionLevel.AGGRESSIVE: 2,
}

DEFAULT_MAX_STACK_DEPTH: dict[CompressionLevel, int] = {
    CompressionLevel.LOW: 10,
    CompressionLevel.MEDIUM: 6,
    CompressionLevel.AGGRESSIVE: 3,
}

DEFAULT_PRESERVE_KEYS: frozenset[str] = frozenset(
    {"id", "name", "type", "status", "error", "message"}
)

DEFAULT_PRESERVE_PATTERNS: frozenset[str] = frozenset(
    {"error", "exception", "failed", "warning"}
)


def _coerce_level(level: CompressionLevel | str) -> CompressionLevel:
    try:
        return CompressionLevel(level)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid compression level '{level}'",
            details={"valid_levels": [lvl.value for lvl in CompressionLevel]},
        ) from e


@dataclass
class SlimOptions:
    """Options for the JSON structural slimmer.

    preserve_keys always wins over aggressive noise-key stripping.
    """

    compression_level: CompressionLevel = CompressionLevel.MEDIUM
    max_array_samples: int = 3
    preserve_keys: set[str] = field(default_factory=lambda: set(DEFAULT_PRESERVE_KEYS))

    def __post_init__(self) -> None:
        self.compression_level = _coerce_level(self.compression_level)
        if self.max_array_samples < 1:
            raise ConfigurationError(
                "max_array_samples must be at least 1",
                details={"max_array_samples": self.max_array_samples},
            )
        self.preserve_keys = set(self.preserve_keys)

    @classmethod
    def for_level(cls, level: CompressionLevel | str) -> SlimOptions:
        """Build the preset options for a compression level."""
        level = _coerce_level(level)
        return cls(
            compression_level=level,
            max_array_samples=DEFAULT_MAX_ARRAY_SAMPLES[level],
        )


@dataclass
class LogOptions:
    """Options for the log-line relevance filter."""

    compression_level: CompressionLevel = CompressionLevel.MEDIUM
    preserve_patterns: set[str] = field(default_factory=lambda: set(DEFAULT_PRESERVE_PATTERNS))
    max_stack_depth: int = 6

    def __post_init__(self) -> None:
        self.compression_level = _coerce_level(self.compression_level)
        if self.max_stack_depth < 0:
            raise ConfigurationError(
                "max_stack_depth must not be negative",
                details={"max_stack_depth": self.max_stack_depth},
            )
        self.preserve_patterns = set(self.preserve_patterns)

    @classmethod
    def for_level(cls, level: CompressionLevel | str) -> LogOptions:
        """Build the preset options for a compression level."""
        level = _coerce_level(level)
        return cls(
            compression_level=level,
            max_stack_depth=DEFAULT_MAX_STACK_DEPTH[level],
        )


def reduction_ratio(original_size: int, transformed_size: int) -> float:
    """(original - transformed) / original, or 0.0 for an empty original.

    Negative when the transformed text is larger.
    """
    if original_size == 0:
        return 0.0
    return (original_size - transformed_size) / original_size


@dataclass
class SlimResult:
    """Result of slimming a JSON payload or a log."""

    original: str
    transformed: str
    original_size: int
    transformed_size: int
    reduction_ratio: float

    @classmethod
    def from_texts(cls, original: str, transformed: str) -> SlimResult:
        """Size both texts with the estimator and build the result."""
        original_size = estimate_tokens(original)
        transformed_size = estimate_tokens(transformed)
        return cls(
            original=original,
            transformed=transformed,
            original_size=original_size,
            transformed_size=transformed_size,
            reduction_ratio=reduction_ratio(original_size, transformed_size),
        )

    @property
    def tokens_saved(self) -> int:
        """Estimated tokens saved (never negative)."""
        return max(0, self.original_size - self.transformed_size)
