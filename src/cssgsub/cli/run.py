"""CLI command: cssgsub run -- rewrite a stylesheet and its paired script."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from cssgsub.cli.options import matching_options
from cssgsub.config import GsubConfig
from cssgsub.errors import ParseError, UnresolvedSelectorError
from cssgsub.events import EventBus, RuleDropped, SelectorDropped
from cssgsub.pipeline import SourceFile, process_file


def _load_config(path: str | None) -> GsubConfig:
    if path is None:
        return GsubConfig()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return GsubConfig.from_dict(data)
    except (json.JSONDecodeError, ValueError, TypeError) as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option("--js-in", type=click.Path(exists=True, dir_okay=False), default=None, help="Script to rewrite")
@click.option("--js-out", type=click.Path(dir_okay=False), default=None, help="Where to write the rewritten script")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Rewritten stylesheet (default: stdout)")
@matching_options
@click.option("--replace-all", is_flag=True, help="Rename classes the script never mentions")
@click.option("--replacements-output", type=click.Path(dir_okay=False), default=None, help="Write the name -> token table as JSON")
@click.option("--compress", is_flag=True, help="Emit compressed CSS")
@click.option("--strict", is_flag=True, help="Fail instead of dropping unresolved selectors")
@click.option("--module", "module", is_flag=True, help="Parse the script as an ES module")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None, help="JSON file with options")
def run(
    stylesheet: str,
    js_in: str | None,
    js_out: str | None,
    output: str | None,
    prefix: str | None,
    regexp: str | None,
    no_nested: bool,
    replace_all: bool,
    replacements_output: str | None,
    compress: bool,
    strict: bool,
    module: bool,
    config_path: str | None,
) -> None:
    """Rename the classes of STYLESHEET and the matching literals of its script.

    Options given on the command line override those from --config.
    """
    config = _load_config(config_path)
    overrides: dict[str, Any] = {
        "js_in": js_in,
        "js_out": js_out,
        "prefix": prefix,
        "regexp": regexp,
        "replacements_output": replacements_output,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    for name, flag in (("replace_all", replace_all), ("compress", compress), ("strict", strict)):
        if flag:
            overrides[name] = True
    if no_nested:
        overrides["nested"] = False
    if module:
        overrides["source_type"] = "module"
    # STYLESHEET always wins over a css_in from --config.
    config = replace(config, css_in=None, **overrides)
    if config.js_in is None or config.js_out is None:
        raise click.UsageError("--js-in and --js-out are required (on the command line or in --config)")

    bus = EventBus()
    dropped = bus.collect(SelectorDropped)
    removed = bus.collect(RuleDropped)

    try:
        result = process_file(SourceFile.read(stylesheet), config, event_bus=bus)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except UnresolvedSelectorError as exc:
        click.echo(f"Unresolved selector: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.contents, encoding="utf-8")
    else:
        click.echo(result.contents)

    click.echo(
        f"Rewrote {Path(stylesheet).name} and {Path(config.js_in).name}: "
        f"{len(dropped)} selector(s) dropped, {len(removed)} rule(s) removed",
        err=True,
    )
