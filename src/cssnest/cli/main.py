"""cssnest CLI entry point: Click group with subcommands."""

import logging

import click

from cssnest import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssnest")
@click.option("-v", "--verbose", is_flag=True, help="Log every rewrite to stderr")
def cli(verbose: bool) -> None:
    """cssnest - compact stylesheets into nested, de-duplicated rules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from cssnest.cli.nest import nest  # noqa: E402
from cssnest.cli.format import format_  # noqa: E402

cli.add_command(nest)
cli.add_command(format_)
