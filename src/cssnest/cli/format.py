"""CLI command: cssnest format -- parse and re-print without rewriting."""

from __future__ import annotations

import sys

import click

from cssnest.parser import ParseError, parse_css
from cssnest.serialize import to_css


@click.command("format")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("-o", "--output", type=click.File("w", encoding="utf-8"), default="-")
@click.option("--indent", default=2, type=click.IntRange(min=0), show_default=True)
def format_(source, output, indent: int) -> None:
    """Print SOURCE (default: stdin) in cssnest's layout, unchanged otherwise."""
    try:
        root = parse_css(source.read())
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    output.write(to_css(root, indent=" " * indent))
