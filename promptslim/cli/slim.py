"""Slimming CLI commands."""

import json
import sys
from typing import TextIO

import click

from ..config import CompressionLevel, LogOptions, SlimOptions
from ..exceptions import ConfigurationError, ParseError
from ..transforms import analyze_json, slim_json, slim_log
from ._utils import print_error, print_size_stats
from .main import main

LEVEL_CHOICES = [level.value for level in CompressionLevel]

input_argument = click.argument("source", type=click.File("r"), default="-")
level_option = click.option(
    "--level",
    "-l",
    type=click.Choice(LEVEL_CHOICES),
    default=CompressionLevel.MEDIUM.value,
    show_default=True,
    help="Compression level",
)
no_stats_option = click.option(
    "--no-stats", is_flag=True, help="Do not print the size statistics panel"
)


@main.command("json")
@input_argument
@level_option
@click.option(
    "--max-samples",
    type=int,
    default=None,
    help="Distinct shapes kept per array (default: 5/3/2 by level)",
)
@click.option(
    "--preserve-key",
    "preserve_keys",
    multiple=True,
    help="Key never stripped as noise; repeatable, replaces the default set",
)
@no_stats_option
def json_command(
    source: TextIO,
    level: str,
    max_samples: int | None,
    preserve_keys: tuple[str, ...],
    no_stats: bool,
) -> None:
    """Deduplicate repeated shapes and strip noisy keys from JSON."""
    try:
        options = SlimOptions.for_level(level)
        if max_samples is not None:
            options = SlimOptions(
                compression_level=options.compression_level,
                max_array_samples=max_samples,
                preserve_keys=options.preserve_keys,
            )
        if preserve_keys:
            options.preserve_keys = set(preserve_keys)
        result = slim_json(source.read(), options)
    except (ParseError, ConfigurationError) as e:
        print_error(str(e))
        sys.exit(1)

    click.echo(result.transformed)
    if not no_stats:
        print_size_stats(
            result.original_size, result.transformed_size, result.reduction_ratio, title="JSON"
        )


@main.command("log")
@input_argument
@level_option
@click.option(
    "--max-stack-depth",
    type=int,
    default=None,
    help="Stack frames kept per error (default: 10/6/3 by level)",
)
@click.option(
    "--preserve-pattern",
    "preserve_patterns",
    multiple=True,
    help="Substring that always keeps a line; repeatable, replaces the default set",
)
@no_stats_option
def log_command(
    source: TextIO,
    level: str,
    max_stack_depth: int | None,
    preserve_patterns: tuple[str, ...],
    no_stats: bool,
) -> None:
    """Keep errors and a bounded stack trace, drop log noise."""
    try:
        options = LogOptions.for_level(level)
        if max_stack_depth is not None:
            options = LogOptions(
                compression_level=options.compression_level,
                preserve_patterns=options.preserve_patterns,
                max_stack_depth=max_stack_depth,
            )
    except ConfigurationError as e:
        print_error(str(e))
        sys.exit(1)
    if preserve_patterns:
        options.preserve_patterns = set(preserve_patterns)

    result = slim_log(source.read(), options)

    click.echo(result.transformed)
    if not no_stats:
        print_size_stats(
            result.original_size, result.transformed_size, result.reduction_ratio, title="Log"
        )


@main.command("schema")
@input_argument
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Print the text summary or the full schema as JSON",
)
@no_stats_option
def schema_command(source: TextIO, output_format: str, no_stats: bool) -> None:
    """Describe a JSON document by its inferred schema."""
    try:
        result = analyze_json(source.read())
    except ParseError as e:
        print_error(str(e))
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(result.schema.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(result.summary.rstrip("\n"))
    if not no_stats:
        print_size_stats(
            result.original_size, result.summary_size, result.reduction_ratio, title="Schema"
        )
