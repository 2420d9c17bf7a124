"""CLI command: cssgsub inspect -- list the class names a stylesheet declares."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cssgsub.cli.options import matching_options
from cssgsub.engine import ClassNameCatalog, css_class_pattern
from cssgsub.errors import ParseError
from cssgsub.stylesheet import parse_stylesheet


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@matching_options
def inspect(
    stylesheet: str, prefix: str | None, regexp: str | None, no_nested: bool
) -> None:
    """Parse a stylesheet and print its class-name catalog.

    Names are listed in catalog order: longest first, ties in source order.
    """
    css_path = Path(stylesheet)

    try:
        parsed = parse_stylesheet(css_path.read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    catalog = ClassNameCatalog.from_stylesheet(
        parsed, css_class_pattern(prefix, regexp), nested=not no_nested
    )
    click.echo(f"Stylesheet: {css_path.name}")
    click.echo(f"Rules:      {sum(1 for _ in parsed.style_rules(nested=True))}")
    click.echo(f"Classes:    {len(catalog)}")
    click.echo()
    for name in catalog:
        click.echo(f"  {name}")
