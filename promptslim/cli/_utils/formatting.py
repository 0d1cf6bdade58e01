"""Formatting utilities for CLI output using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

# Diagnostics go to stderr so stdout stays pipeable
console = Console(stderr=True)


def format_ratio(ratio: float) -> str:
    """Format a reduction ratio as a signed percentage.

    Args:
        ratio: Reduction ratio, negative when the output grew.

    Returns:
        A string like "72.4%" or "-3.0%".
    """
    return f"{ratio * 100:.1f}%"


def print_size_stats(
    original_size: int,
    transformed_size: int,
    ratio: float,
    title: str = "Size",
) -> None:
    """Print before/after token estimates in a panel.

    Args:
        original_size: Estimated tokens of the input.
        transformed_size: Estimated tokens of the output.
        ratio: Reduction ratio.
        title: Title for the panel.
    """
    stats = {
        "Original tokens": original_size,
        "Slimmed tokens": transformed_size,
        "Saved": max(0, original_size - transformed_size),
        "Reduction": format_ratio(ratio),
    }
    content = "\n".join(f"[bold]{key}:[/bold] {value}" for key, value in stats.items())
    console.print(Panel(content, title=title))


def print_error(msg: str) -> None:
    """Print an error message in red.

    Args:
        msg: The error message to display.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(msg)}", highlight=False)
