"""Command: load credits from a CSV file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixCommand
from sixdegrees.services.catalog import CatalogService

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext


@click.command(
    cls=SixCommand,
    examples="""\
  sixdeg ingest credits.csv
  sixdeg --json ingest data/credits.csv

  CSV header: person_id,person_name,work_id,work_title[,year][,credit_type][,role]""",
)
@click.argument("csv_path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def ingest(app: AppContext, csv_path: Path) -> None:
    """Load people, works and credits from CSV_PATH."""
    app.emit(CatalogService(app.workspace).ingest_csv(csv_path))
