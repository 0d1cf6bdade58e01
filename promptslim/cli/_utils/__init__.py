"""CLI utilities for formatting output."""

from .formatting import (
    console,
    format_ratio,
    print_error,
    print_size_stats,
)

__all__ = [
    "console",
    "format_ratio",
    "print_error",
    "print_size_stats",
]
