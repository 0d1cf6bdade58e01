"""Structural JSON slimming.

Arrays in API payloads are usually many copies of the same object shape.
The slimmer keeps one representative per shape and replaces the rest with
a single summary string, so a model still sees every distinct structure:

    [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}, {"id": 3, "name": "c"}]
    ->
    [{"id": 1, "name": "a"}, "... and 2 more similar items"]

On aggressive compression it also strips keys that rarely matter to a
reader (metadata, debug, trace, __typename, _links, etag). Preserved keys
are never stripped.

The output is always valid JSON re-serialized with 2-space indentation.
Slimming is lossy: the trailing summary string replaces discarded items.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..config import CompressionLevel, SlimOptions, SlimResult
from ..exceptions import ParseError, parse_json

logger = logging.getLogger(__name__)

# Lowercased substrings; a key containing any of them is noise
NOISE_KEY_SUBSTRINGS: tuple[str, ...] = (
    "metadata",
    "debug",
    "trace",
    "__typename",
    "_links",
    "etag",
)

# Scan at most this many elements per distinct shape we are allowed to keep
SCAN_WINDOW_FACTOR = 3

SUMMARY_TEMPLATE = "... and {count} more similar items"


def value_kind(value: Any) -> str:
    """JSON kind name of a parsed value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _normalize_numbers(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_normalize_numbers(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    return value


def canonical_json(value: Any) -> str:
    """Serialize a value so that deep-equal values give equal text.

    Integral floats serialize as integers, so 1 and 1.0 are one value.
    """
    return json.dumps(
        _normalize_numbers(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def shape_signature(value: Any) -> tuple[str, ...]:
    """Signature used to spot structurally duplicate array elements.

    Objects are keyed on their sorted key set (values ignored); anything
    else on its kind plus its serialized value.
    """
    if isinstance(value, dict):
        return ("object", *sorted(value))
    return (value_kind(value), canonical_json(value))


def is_noise_key(key: str) -> bool:
    """True when the lowercased key contains a noise substring."""
    lowered = key.lower()
    return any(noisy in lowered for noisy in NOISE_KEY_SUBSTRINGS)


def unique_structures(items: list[Any], max_samples: int) -> list[Any]:
    """First element of each distinct shape, in first-seen order.

    Only the leading ``max_samples * SCAN_WINDOW_FACTOR`` elements are
    scanned, and scanning stops once ``max_samples`` shapes are found.
    """
    structures: dict[tuple[str, ...], Any] = {}
    for item in items[: max_samples * SCAN_WINDOW_FACTOR]:
        structures.setdefault(shape_signature(item), item)
        if len(structures) >= max_samples:
            break
    return list(structures.values())


class JsonSlimmer:
    """Deduplicates repeated array shapes and strips noisy keys.

    Example:
        >>> slimmer = JsonSlimmer(SlimOptions.for_level("aggressive"))
        >>> result = slimmer.slim(api_response)
        >>> print(result.transformed)
    """

    def __init__(self, options: SlimOptions | None = None):
        """Initialize the slimmer.

        Args:
            options: Slimming options. Defaults to the medium preset.
        """
        self.options = options or SlimOptions.for_level(CompressionLevel.MEDIUM)

    def slim(self, content: str) -> SlimResult:
        """Slim a JSON document.

        Args:
            content: JSON text.

        Returns:
            SlimResult with the re-serialized slimmed JSON.

        Raises:
            ParseError: If content is not valid JSON.
        """
        data = parse_json(content)
        try:
            slimmed = self.slim_value(data)
            transformed = json.dumps(slimmed, indent=2, ensure_ascii=False)
        except RecursionError as e:
            raise ParseError(f"Nesting too deep: {e}") from e

        result = SlimResult.from_texts(content, transformed)
        logger.debug(
            "Slimmed JSON: %d -> %d tokens (%.1f%% reduction)",
            result.original_size,
            result.transformed_size,
            result.reduction_ratio * 100,
        )
        return result

    def slim_value(self, value: Any) -> Any:
        """Slim an already-parsed value. The input is left untouched."""
        if isinstance(value, list):
            return self._slim_array(value)
        if isinstance(value, dict):
            return self._slim_object(value)
        return value

    def _slim_array(self, items: list[Any]) -> list[Any]:
        if not items:
            return []

        representatives = unique_structures(items, self.options.max_array_samples)
        if len(representatives) < len(items):
            omitted = len(items) - len(representatives)
            logger.debug(
                "Collapsed array of %d items to %d representatives", len(items), len(representatives)
            )
            slimmed = [self.slim_value(item) for item in representatives]
            slimmed.append(SUMMARY_TEMPLATE.format(count=omitted))
            return slimmed

        return [self.slim_value(item) for item in items]

    def _slim_object(self, obj: dict[str, Any]) -> dict[str, Any]:
        strip_noise = self.options.compression_level == CompressionLevel.AGGRESSIVE
        result: dict[str, Any] = {}
        for key, value in obj.items():
            if key in self.options.preserve_keys:
                result[key] = self.slim_value(value)
                continue
            if strip_noise and is_noise_key(key):
                continue
            result[key] = self.slim_value(value)
        return result


def slim_json(content: str, options: SlimOptions | None = None) -> SlimResult:
    """Convenience function to slim a single JSON document.

    Args:
        content: JSON text.
        options: Optional slimming options (medium preset by default).

    Returns:
        SlimResult with the slimmed JSON text and size metrics.

    Raises:
        ParseError: If content is not valid JSON.
    """
    return JsonSlimmer(options).slim(content)
