"""Main CLI entry point for promptslim."""

import logging

import click


def get_version() -> str:
    """Get the current version."""
    from promptslim import __version__

    return __version__


@click.group()
@click.version_option(version=get_version(), prog_name="promptslim")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """promptslim - shrink JSON and logs before pasting them into a prompt.

    \b
    Examples:
        promptslim json response.json --level aggressive
        promptslim log crash.log --max-stack-depth 3
        cat orders.json | promptslim schema
    """
    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


# Import subcommands - these register themselves with the main group
def _register_commands() -> None:
    """Register all subcommands."""
    from . import slim  # noqa: F401


_register_commands()

if __name__ == "__main__":
    main()
