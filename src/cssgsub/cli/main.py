"""cssgsub CLI entry point: Click group with subcommands."""

import logging

import click

from cssgsub import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssgsub")
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv for every token")
def cli(verbose: int) -> None:
    """cssgsub - shorten CSS class names in a stylesheet and its script."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Import and register subcommands
from cssgsub.cli.run import run  # noqa: E402
from cssgsub.cli.inspect import inspect  # noqa: E402

cli.add_command(run)
cli.add_command(inspect)
