# ABOUTME: CLI package for Bookinfo, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookinfo.cli.commands import extract_cmd


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich, keeping stdout for results."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # httpx and openai log every request at INFO/DEBUG
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@click.group()
@click.version_option(package_name="bookinfo")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Bookinfo - extract book information from a PDF file of a book."""
    _configure_logging(verbose)


cli.add_command(extract_cmd.extract)
