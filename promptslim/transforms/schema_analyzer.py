"""JSON schema and value statistics inference.

Instead of sending a large, repetitive payload to a model, send a short
description of its shape: which fields exist, how often, their types,
numeric ranges, string formats and, when small enough, the full set of
observed values.

Example summary for an array of orders:

    Array containing objects:
    Object with 3 fields:

    Required fields (2):
    • id: number (1 to 250)
    • status: string (possible values: "paid", "pending", "refunded")

    Optional fields (1):
    • coupon: string (12% present) (possible values: "SPRING", "VIP")
"""

from __future__ import annotations

import json
import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import reduction_ratio
from ..exceptions import ParseError, parse_json
from ..tokenizers import estimate_tokens
from .json_slimmer import canonical_json, value_kind

logger = logging.getLogger(__name__)

# Distinct values are kept in full up to this count
MAX_ENUMERATED_VALUES = 20
# Otherwise only this many are kept for bookkeeping
TRUNCATED_VALUES = 5
MAX_EXAMPLES = 3

REQUIRED_FREQUENCY = 0.9
OBJECT_ARRAY_THRESHOLD = 0.8

MAX_REQUIRED_SHOWN = 10
MAX_OPTIONAL_SHOWN = 5

STRING_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("date", re.compile(r"^\d{4}-\d{2}-\d{2}")),
    ("email", re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")),
    ("url", re.compile(r"^https?://")),
    (
        "uuid",
        re.compile(
            r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
        ),
    ),
    ("numeric-string", re.compile(r"^\d+$")),
)


class ValueKind(str, Enum):
    """Runtime kind of a JSON value."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


class SchemaKind(str, Enum):
    """Variant tag of a SchemaAnalysis."""

    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"


@dataclass
class NumericRange:
    min: int | float
    max: int | float


@dataclass
class ValueAnalysis:
    """Statistics over a list of values observed for one field."""

    kind: ValueKind
    observed_values: list[Any] = field(default_factory=list)
    observed_count: int = 0
    range: NumericRange | None = None
    patterns: list[str] = field(default_factory=list)
    examples: list[Any] = field(default_factory=list)

    @property
    def is_enumerable(self) -> bool:
        return self.observed_count <= MAX_ENUMERATED_VALUES

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "observed_values": self.observed_values,
            "observed_count": self.observed_count,
            "examples": self.examples,
        }
        if self.range is not None:
            data["range"] = {"min": self.range.min, "max": self.range.max}
        if self.patterns:
            data["patterns"] = self.patterns
        return data


@dataclass
class SchemaField:
    """A field seen across one or more objects."""

    name: str
    analysis: ValueAnalysis
    presence_frequency: float

    @property
    def required(self) -> bool:
        return self.presence_frequency > REQUIRED_FREQUENCY

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "required": self.required,
            "presence_frequency": self.presence_frequency,
            "analysis": self.analysis.to_dict(),
        }


@dataclass
class SchemaAnalysis:
    """Inferred schema, tagged by kind.

    OBJECT uses ``fields``; ARRAY uses ``item_schema`` when the items are
    mostly objects and ``item_analysis`` otherwise (neither when empty);
    PRIMITIVE uses ``analysis``.
    """

    kind: SchemaKind
    sample_count: int
    fields: list[SchemaField] = field(default_factory=list)
    item_schema: SchemaAnalysis | None = None
    item_analysis: ValueAnalysis | None = None
    analysis: ValueAnalysis | None = None

    @property
    def required_fields(self) -> list[SchemaField]:
        return [f for f in self.fields if f.required]

    @property
    def optional_fields(self) -> list[SchemaField]:
        return [f for f in self.fields if not f.required]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value, "sample_count": self.sample_count}
        if self.kind == SchemaKind.OBJECT:
            data["fields"] = [f.to_dict() for f in self.fields]
        if self.item_schema is not None:
            data["item_schema"] = self.item_schema.to_dict()
        if self.item_analysis is not None:
            data["item_analysis"] = self.item_analysis.to_dict()
        if self.analysis is not None:
            data["analysis"] = self.analysis.to_dict()
        return data


@dataclass
class AnalysisResult:
    """Result of analyzing a JSON document."""

    original: str
    schema: SchemaAnalysis
    summary: str
    original_size: int
    summary_size: int
    reduction_ratio: float


def detect_patterns(strings: list[str]) -> list[str]:
    """Names of the string patterns matched by at least one string."""
    return [
        name
        for name, pattern in STRING_PATTERNS
        if any(pattern.search(s) for s in strings)
    ]


def analyze_values(values: list[Any]) -> ValueAnalysis:
    """Infer kind, distinct values, range and patterns of a value list.

    The kind is the most common runtime kind; on a tie the kind seen
    first wins.
    """
    if not values:
        return ValueAnalysis(kind=ValueKind.NULL)

    distinct: dict[str, Any] = {}
    for value in values:
        distinct.setdefault(canonical_json(value), value)
    unique_values = list(distinct.values())
    observed_count = len(unique_values)

    kind_counts = Counter(value_kind(v) for v in values)
    kind = ValueKind(kind_counts.most_common(1)[0][0])

    analysis = ValueAnalysis(
        kind=kind,
        observed_values=(
            unique_values
            if observed_count <= MAX_ENUMERATED_VALUES
            else unique_values[:TRUNCATED_VALUES]
        ),
        observed_count=observed_count,
        examples=unique_values[:MAX_EXAMPLES],
    )

    if kind == ValueKind.NUMBER:
        numbers = [v for v in values if value_kind(v) == ValueKind.NUMBER.value]
        analysis.range = NumericRange(min=min(numbers), max=max(numbers))
    elif kind == ValueKind.STRING:
        analysis.patterns = detect_patterns([v for v in values if isinstance(v, str)])

    return analysis


def analyze_objects(objects: list[Any]) -> SchemaAnalysis:
    """Union the fields of several objects and analyze each field."""
    if not objects:
        return SchemaAnalysis(kind=SchemaKind.OBJECT, sample_count=0)

    field_values: dict[str, list[Any]] = {}
    for obj in objects:
        if not isinstance(obj, dict):
            continue
        for key, value in obj.items():
            field_values.setdefault(key, []).append(value)

    fields = [
        SchemaField(
            name=name,
            analysis=analyze_values(values),
            presence_frequency=len(values) / len(objects),
        )
        for name, values in field_values.items()
    ]
    # sort() is stable, so equal frequencies keep first-seen order
    fields.sort(key=lambda f: f.presence_frequency, reverse=True)

    return SchemaAnalysis(kind=SchemaKind.OBJECT, sample_count=len(objects), fields=fields)


def analyze_arrays(arrays: list[Any]) -> SchemaAnalysis:
    """Analyze the flattened items of one or more arrays."""
    items = [item for arr in arrays if isinstance(arr, list) for item in arr]
    if not items:
        return SchemaAnalysis(kind=SchemaKind.ARRAY, sample_count=len(arrays))

    object_items = [item for item in items if isinstance(item, dict)]
    if len(object_items) >= len(items) * OBJECT_ARRAY_THRESHOLD:
        return SchemaAnalysis(
            kind=SchemaKind.ARRAY,
            sample_count=len(arrays),
            item_schema=analyze_objects(object_items),
        )
    return SchemaAnalysis(
        kind=SchemaKind.ARRAY,
        sample_count=len(arrays),
        item_analysis=analyze_values(items),
    )


def analyze_data(data: Any) -> SchemaAnalysis:
    """Build the schema of an already-parsed JSON value."""
    if isinstance(data, list):
        return analyze_arrays([data])
    if isinstance(data, dict):
        return analyze_objects([data])
    return SchemaAnalysis(
        kind=SchemaKind.PRIMITIVE,
        sample_count=1,
        analysis=analyze_values([data]),
    )


def _format_values(values: list[Any]) -> str:
    return ", ".join(json.dumps(v, ensure_ascii=False) for v in values)


def _field_annotation(analysis: ValueAnalysis) -> str:
    """Single annotation: range, else possible values, else patterns."""
    if analysis.kind == ValueKind.NUMBER and analysis.range is not None:
        return f" ({analysis.range.min} to {analysis.range.max})"
    if analysis.is_enumerable:
        return f" (possible values: {_format_values(analysis.observed_values)})"
    if analysis.patterns:
        return f" (patterns: {', '.join(analysis.patterns)})"
    return ""


def _value_annotation(analysis: ValueAnalysis) -> str:
    if analysis.is_enumerable:
        return f"\nPossible values: {_format_values(analysis.observed_values)}"
    if analysis.kind == ValueKind.NUMBER and analysis.range is not None:
        return f"\nRange: {analysis.range.min} to {analysis.range.max}"
    if analysis.patterns:
        return f"\nPatterns: {', '.join(analysis.patterns)}"
    return ""


def _render_object(schema: SchemaAnalysis) -> str:
    required = schema.required_fields
    optional = schema.optional_fields

    lines = [f"Object with {len(schema.fields)} fields:"]

    if required:
        lines.append("")
        lines.append(f"Required fields ({len(required)}):")
        for f in required[:MAX_REQUIRED_SHOWN]:
            lines.append(f"• {f.name}: {f.analysis.kind.value}{_field_annotation(f.analysis)}")

    if optional:
        lines.append("")
        lines.append(f"Optional fields ({len(optional)}):")
        for f in optional[:MAX_OPTIONAL_SHOWN]:
            present = f"{f.presence_frequency * 100:.0f}% present"
            lines.append(
                f"• {f.name}: {f.analysis.kind.value} ({present}){_field_annotation(f.analysis)}"
            )
        if len(optional) > MAX_OPTIONAL_SHOWN:
            lines.append(f"... and {len(optional) - MAX_OPTIONAL_SHOWN} more optional fields")

    return "\n".join(lines) + "\n"


def render_summary(schema: SchemaAnalysis) -> str:
    """Render a deterministic, human-readable description of a schema."""
    if schema.kind == SchemaKind.OBJECT:
        return _render_object(schema)

    if schema.kind == SchemaKind.ARRAY:
        if schema.item_schema is not None:
            return f"Array containing objects:\n{render_summary(schema.item_schema)}"
        if schema.item_analysis is not None:
            analysis = schema.item_analysis
            return f"Array of {analysis.kind.value} values{_value_annotation(analysis)}"
        return "Array (empty or mixed types)"

    if schema.analysis is None:
        return "Unknown type"
    return f"{schema.analysis.kind.value} value{_value_annotation(schema.analysis)}"


class SchemaAnalyzer:
    """Infers a schema from JSON text and renders a summary of it.

    Example:
        >>> result = SchemaAnalyzer().analyze(orders_json)
        >>> print(result.summary)
    """

    def analyze(self, content: str) -> AnalysisResult:
        """Analyze a JSON document.

        Args:
            content: JSON text.

        Returns:
            AnalysisResult with the schema, its summary and size metrics.

        Raises:
            ParseError: If content is not valid JSON.
        """
        data = parse_json(content)
        try:
            schema = analyze_data(data)
            summary = render_summary(schema)
        except RecursionError as e:
            raise ParseError(f"Nesting too deep: {e}") from e

        original_size = estimate_tokens(content)
        summary_size = estimate_tokens(summary)
        logger.debug(
            "Analyzed %s schema: %d -> %d tokens", schema.kind.value, original_size, summary_size
        )
        return AnalysisResult(
            original=content,
            schema=schema,
            summary=summary,
            original_size=original_size,
            summary_size=summary_size,
            reduction_ratio=reduction_ratio(original_size, summary_size),
        )


def analyze_json(content: str) -> AnalysisResult:
    """Convenience function to analyze a single JSON document.

    Raises:
        ParseError: If content is not valid JSON.
    """
    return SchemaAnalyzer().analyze(content)
