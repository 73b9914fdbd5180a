# ABOUTME: Shared Click options for listenshelf CLI commands.
# ABOUTME: Provides reusable decorators for the export file and covers map paths.

from pathlib import Path

import click

from listenshelf.config import CATEGORIES, DEFAULT_COVERS_MAP, DEFAULT_EXPORT_PATH

export_option = click.option(
    "-e",
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_EXPORT_PATH,
    show_default=True,
    help="Path to the audiobook service JSON export.",
)

covers_map_option = click.option(
    "--covers-map",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_COVERS_MAP,
    show_default=True,
    help="Path to the covers map written by fetch-covers.",
)

category_choice = click.Choice(sorted(CATEGORIES))
