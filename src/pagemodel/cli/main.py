"""Pagemodel CLI entry point: Click group with subcommands."""

import logging

import click

from pagemodel import __version__


@click.group()
@click.version_option(version=__version__, prog_name="pagemodel")
@click.option("-v", "--verbose", is_flag=True, help="Log conversion details to stderr")
def cli(verbose: bool) -> None:
    """Pagemodel - convert HTML+CSS pages into page-builder models."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from pagemodel.cli.convert import convert  # noqa: E402
from pagemodel.cli.validate import validate  # noqa: E402
from pagemodel.cli.inspect import inspect  # noqa: E402

cli.add_command(convert)
cli.add_command(validate)
cli.add_command(inspect)
