"""Command-line interface for promptslim."""

from .main import main

__all__ = ["main"]
