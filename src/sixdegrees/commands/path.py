"""Commands: shortest path lookups between two people."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixCommand
from sixdegrees.services.pathfinder import PathService

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext


@click.command(
    cls=SixCommand,
    examples="""\
  sixdeg path 1 4
  sixdeg path 1 4 --max-depth 3
  sixdeg path 1 4 --refresh
  sixdeg --json path 17 2045""",
)
@click.argument("from_id", type=int)
@click.argument("to_id", type=int)
@click.option("--max-depth", default=None, type=int, help="Maximum hops (1-6).")
@click.option("--refresh", is_flag=True, help="Ignore the cache and recompute.")
@click.pass_obj
def path(app: AppContext, from_id: int, to_id: int, max_depth: int | None, refresh: bool) -> None:
    """Find the degrees of separation between two people."""
    app.emit(
        PathService(app.workspace).find_shortest_path(
            from_id, to_id, max_depth, refresh=refresh
        )
    )


@click.command(
    cls=SixCommand,
    examples="""\
  sixdeg connections 1 4
  sixdeg --json connections 17 2045
  sixdeg -q connections 1 4""",
)
@click.argument("from_id", type=int)
@click.argument("to_id", type=int)
@click.pass_obj
def connections(app: AppContext, from_id: int, to_id: int) -> None:
    """Show the shortest path with a shared work for each hop."""
    app.emit(PathService(app.workspace).find_path_with_movies(from_id, to_id))
