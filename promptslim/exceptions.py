"""Custom exceptions for promptslim.

All exceptions inherit from PromptSlimError, making it easy to catch
anything raised by the slimming engines:

    from promptslim import slim_json, ParseError, PromptSlimError

    try:
        result = slim_json(payload)
    except ParseError as e:
        print(f"Bad input: {e.details['diagnostic']}")
    except PromptSlimError as e:
        print(f"promptslim error: {e}")
"""

from __future__ import annotations

import json
import math
from typing import Any


class PromptSlimError(Exception):
    """Base exception for all promptslim errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(PromptSlimError):
    """Raised when slimming options are invalid.

    Example:
        ConfigurationError(
            "max_array_samples must be at least 1",
            details={"max_array_samples": 0}
        )
    """

    pass


class ParseError(PromptSlimError):
    """Raised when input text is not valid JSON.

    The decoder's own diagnostic is kept verbatim in the message and in
    ``details["diagnostic"]`` so callers can show it to a user as-is.
    Raised before any transformation work happens.
    """

    def __init__(
        self,
        diagnostic: str,
        lineno: int | None = None,
        colno: int | None = None,
    ):
        super().__init__(f"Invalid JSON: {diagnostic}", details={"diagnostic": diagnostic})
        self.diagnostic = diagnostic
        self.lineno = lineno
        self.colno = colno

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_decode_error(cls, error: json.JSONDecodeError) -> ParseError:
        """Wrap a json.JSONDecodeError, keeping its position."""
        return cls(str(error), lineno=error.lineno, colno=error.colno)


class _NonStandardLiteral(ValueError):
    """NaN, Infinity or an overflowing number; valid Python, invalid JSON."""

    pass


def _reject_constant(name: str) -> Any:
    raise _NonStandardLiteral(f"Expecting value: {name} is not a JSON literal")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise _NonStandardLiteral(f"Number out of range: {text}")
    return value


def parse_json(text: str) -> Any:
    """Parse JSON text, raising ParseError with the decoder diagnostic.

    NaN, Infinity and numbers that overflow to infinity are rejected, so
    anything accepted here re-serializes as valid JSON.
    """
    try:
        return json.loads(
            text, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except json.JSONDecodeError as e:
        raise ParseError.from_decode_error(e) from e
    except ValueError as e:
        raise ParseError(str(e)) from e
    except RecursionError as e:
        raise ParseError(str(e)) from e
