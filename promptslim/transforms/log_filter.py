"""Log-line relevance filter for error logs and stack traces.

Pasted logs are mostly noise around a handful of useful lines: the error
message itself, the first few application frames of its stack trace, and
anything the user explicitly asked to keep.

Filtering Strategy:
1. Classify each line (primary error, stack frame, preserved, other)
2. Keep every primary error and reset the stack budget
3. Keep at most max_stack_depth frames per error, skipping framework noise
4. Keep other lines according to the compression level
5. Strip timestamps, normalize whitespace, collapse repeated lines

Pattern tables are ordered and module-level so their precedence is
explicit and testable on its own.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from ..config import CompressionLevel, LogOptions, SlimResult

logger = logging.getLogger(__name__)

# "Error:", "TypeError:", "Unhandled exception: ..." and friends
ERROR_PREFIX_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^.*?Error:", re.IGNORECASE),
    re.compile(r"^.*?Exception:", re.IGNORECASE),
    re.compile(r"^.*?Failed:", re.IGNORECASE),
    re.compile(r"^.*?Fatal:", re.IGNORECASE),
)

STACK_FRAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\s*at\s+.*?\(.*?:\d+:\d+\)"),  # JS: at fn (file:line:col)
    re.compile(r"^\s*at\s+.*?:\d+:\d+"),  # JS: at file:line:col
    re.compile(r"^\s*at\s+"),  # Java/C#/anonymous frames
    re.compile(r'^\s*File ".*?", line \d+'),  # Python traceback
)

FRAMEWORK_NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"node_modules"),
    re.compile(r"webpack", re.IGNORECASE),
    re.compile(r"babel", re.IGNORECASE),
    re.compile(r"internal/process"),
    re.compile(r"internal/modules"),
    re.compile(r"^\s*at\s+Module\._"),
    re.compile(r"^\s*at\s+Object\.<anonymous>"),
    re.compile(r"^\s*at\s+require\s*\("),
    re.compile(r"^\s*at\s+Function\.Module\._load"),
    re.compile(r"site-packages"),
    re.compile(r"dist-packages"),
    re.compile(r"<frozen importlib"),
)

TIMESTAMP_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\d{4}-\d{2}-\d{2}[T\s]\d{2}:\d{2}:\d{2}(?:[.,]\d+)?(?:Z|[+-]\d{2}:?\d{2})?"),
    re.compile(r"^\[\d{4}-\d{2}-\d{2}[^\]]*\]"),
    re.compile(r"^\d{2}:\d{2}:\d{2}(?:[.,]\d+)?"),
)

# Substrings (lowercase) that keep an unclassified line on aggressive compression
AGGRESSIVE_KEYWORDS: tuple[str, ...] = ("error", "failed", "exception")

TRUNCATION_MARKER = "    ... (remaining stack trace truncated)"

_WHITESPACE_RUN = re.compile(r"\s+")


class LineKind(Enum):
    """Classification of a log line, in precedence order."""

    PRIMARY_ERROR = "primary_error"
    STACK_FRAME = "stack_frame"
    PRESERVED = "preserved"
    OTHER = "other"


class StackPhase(Enum):
    """Where the filter is within the current error group."""

    NO_ERROR = "no_error"
    IN_ERROR = "in_error"
    TRUNCATED = "truncated"


class FrameDecision(Enum):
    """What to do with a stack frame line."""

    KEEP = "keep"
    TRUNCATE = "truncate"
    DROP = "drop"


def is_stack_frame(line: str) -> bool:
    return any(pattern.search(line) for pattern in STACK_FRAME_PATTERNS)


def is_framework_noise(line: str) -> bool:
    return any(pattern.search(line) for pattern in FRAMEWORK_NOISE_PATTERNS)


def has_error_prefix(line: str) -> bool:
    return any(pattern.search(line) for pattern in ERROR_PREFIX_PATTERNS)


def classify_line(line: str, preserve_patterns: set[str] | frozenset[str] = frozenset()) -> LineKind:
    """Classify a single (already stripped) log line."""
    frame = is_stack_frame(line)
    if has_error_prefix(line) and not frame:
        return LineKind.PRIMARY_ERROR
    if frame:
        return LineKind.STACK_FRAME
    if any(pattern in line for pattern in preserve_patterns):
        return LineKind.PRESERVED
    return LineKind.OTHER


@dataclass
class StackTracker:
    """Per-error-group stack budget.

    NO_ERROR -> IN_ERROR(depth) -> TRUNCATED; a new primary error always
    moves back to IN_ERROR with depth 0. Exactly one truncation marker is
    emitted per error group, when depth reaches max_depth.
    """

    max_depth: int
    phase: StackPhase = StackPhase.NO_ERROR
    depth: int = 0

    def start_error(self) -> None:
        self.phase = StackPhase.IN_ERROR
        self.depth = 0

    def admit_frame(self) -> FrameDecision:
        """Decide on the next (non-noise) frame and advance the state."""
        if self.phase == StackPhase.NO_ERROR:
            return FrameDecision.KEEP
        if self.phase == StackPhase.TRUNCATED:
            return FrameDecision.DROP
        if self.depth < self.max_depth:
            self.depth += 1
            return FrameDecision.KEEP
        self.phase = StackPhase.TRUNCATED
        return FrameDecision.TRUNCATE


def strip_timestamp(line: str) -> str:
    """Remove a leading timestamp in any of the recognized formats."""
    for pattern in TIMESTAMP_PATTERNS:
        line, count = pattern.subn("", line, count=1)
        if count:
            break
    return line.strip()


def clean_line(line: str) -> str:
    """Strip timestamp, collapse whitespace runs, trim."""
    return _WHITESPACE_RUN.sub(" ", strip_timestamp(line)).strip()


def collapse_repeats(lines: list[str]) -> list[str]:
    """Collapse directly consecutive identical lines into one."""
    collapsed: list[str] = []
    for line in lines:
        if not collapsed or collapsed[-1] != line:
            collapsed.append(line)
    return collapsed


class LogFilter:
    """Selects the relevant lines of an error log.

    Example:
        >>> log_filter = LogFilter(LogOptions.for_level("aggressive"))
        >>> result = log_filter.filter(stack_trace_text)
        >>> print(result.transformed)
    """

    def __init__(self, options: LogOptions | None = None):
        """Initialize the filter.

        Args:
            options: Filter options. Defaults to the medium preset.
        """
        self.options = options or LogOptions.for_level(CompressionLevel.MEDIUM)

    def filter(self, content: str) -> SlimResult:
        """Filter log text. Never raises; empty input gives empty output.

        Args:
            content: Raw log text.

        Returns:
            SlimResult with the filtered log.
        """
        lines = content.split("\n")
        relevant = self.select_lines(lines)
        cleaned = collapse_repeats([clean_line(line) for line in relevant])
        transformed = "\n".join(cleaned)

        result = SlimResult.from_texts(content, transformed)
        logger.debug(
            "Filtered log: %d -> %d lines, %d -> %d tokens",
            len(lines),
            len(cleaned),
            result.original_size,
            result.transformed_size,
        )
        return result

    def select_lines(self, lines: list[str]) -> list[str]:
        """Pick the lines to keep, before cleanup."""
        level = self.options.compression_level
        tracker = StackTracker(max_depth=self.options.max_stack_depth)
        selected: list[str] = []

        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                continue

            kind = classify_line(line, self.options.preserve_patterns)

            if kind == LineKind.PRIMARY_ERROR:
                selected.append(line)
                tracker.start_error()
                continue

            if kind == LineKind.STACK_FRAME:
                if tracker.phase == StackPhase.NO_ERROR:
                    selected.append(line)
                    continue
                if level != CompressionLevel.LOW and is_framework_noise(line):
                    continue
                decision = tracker.admit_frame()
                if decision == FrameDecision.KEEP:
                    selected.append(line)
                elif decision == FrameDecision.TRUNCATE:
                    selected.append(TRUNCATION_MARKER)
                continue

            if kind == LineKind.PRESERVED:
                selected.append(line)
                continue

            if self._keep_unclassified(line, level):
                selected.append(line)

        return selected

    @staticmethod
    def _keep_unclassified(line: str, level: CompressionLevel) -> bool:
        if level == CompressionLevel.AGGRESSIVE:
            lowered = line.lower()
            return any(keyword in lowered for keyword in AGGRESSIVE_KEYWORDS)
        if level == CompressionLevel.MEDIUM:
            return not is_framework_noise(line)
        return True


def slim_log(content: str, options: LogOptions | None = None) -> SlimResult:
    """Convenience function to filter a single log.

    Args:
        content: Raw log text.
        options: Optional filter options (medium preset by default).

    Returns:
        SlimResult with the filtered log and size metrics.
    """
    return LogFilter(options).filter(content)
