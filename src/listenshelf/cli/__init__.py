# ABOUTME: CLI package for listenshelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from listenshelf.cli.commands import books_cmd, fetch_cmd, stats_cmd


@click.group()
@click.version_option(package_name="listenshelf")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Show log output (-v for progress, -vv for source-level detail).",
)
def cli(verbose: int) -> None:
    """listenshelf - reading history and cover fetcher for audiobook exports."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


cli.add_command(fetch_cmd.fetch_covers_command)
cli.add_command(books_cmd.books)
cli.add_command(stats_cmd.stats)
