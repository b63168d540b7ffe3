"""CLI command: cssnest nest -- compact a stylesheet into nested rules."""

from __future__ import annotations

import sys

import click

from cssnest.config import NestOptions
from cssnest.errors import NestError
from cssnest.parser import ParseError, parse_css
from cssnest.serialize import to_css
from cssnest.transforms import apply_transforms


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-o",
    "--output",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Where to write the result (default: stdout)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML file with pass toggles",
)
@click.option("--nest-descendants/--no-nest-descendants", default=None)
@click.option("--collapse-nested-siblings/--no-collapse-nested-siblings", default=None)
@click.option("--factor-common-properties/--no-factor-common-properties", default=None)
@click.option("--nest-pseudos/--no-nest-pseudos", default=None)
@click.option("--indent", default=2, type=click.IntRange(min=0), show_default=True)
def nest(
    source,
    output,
    config_path: str | None,
    nest_descendants: bool | None,
    collapse_nested_siblings: bool | None,
    factor_common_properties: bool | None,
    nest_pseudos: bool | None,
    indent: int,
) -> None:
    """Rewrite SOURCE (default: stdin) into nested, de-duplicated CSS.

    Pass toggles given on the command line override the config file.
    """
    try:
        options = NestOptions.from_toml(config_path) if config_path else NestOptions()
        options = options.merged(
            nest_descendants=nest_descendants,
            collapse_nested_siblings=collapse_nested_siblings,
            factor_common_properties=factor_common_properties,
            nest_pseudos=nest_pseudos,
        )
        root = parse_css(source.read())
        apply_transforms(root, options)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except NestError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    output.write(to_css(root, indent=" " * indent))
