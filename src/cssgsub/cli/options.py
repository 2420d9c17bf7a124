"""Options shared by several subcommands."""

from __future__ import annotations

import re
from typing import Any, Callable

import click

F = Callable[..., Any]


def _check_regexp(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return value
    try:
        re.compile(value)
    except re.error as exc:
        raise click.BadParameter(f"invalid pattern: {exc}") from exc
    return value


def matching_options(func: F) -> F:
    """--prefix / --regexp / --no-nested: how class names are recognised."""
    func = click.option(
        "--no-nested",
        "no_nested",
        is_flag=True,
        help="Ignore class names that only appear inside @media/@supports blocks",
    )(func)
    func = click.option(
        "--regexp",
        default=None,
        callback=_check_regexp,
        help="Pattern for class names that do not share a prefix",
    )(func)
    func = click.option("--prefix", default=None, help="Only rename classes starting with this")(func)
    return func
