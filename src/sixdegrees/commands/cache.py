"""Command group: path cache inspection and maintenance."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixGroup
from sixdegrees.services.cache import CacheService

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext

_CACHE_EXAMPLES = """\
  sixdeg cache stats
  sixdeg --json cache stats
  sixdeg cache purge"""


@click.group(cls=SixGroup, examples=_CACHE_EXAMPLES)
@click.pass_obj
def cache(app: AppContext) -> None:
    """Inspect and maintain the path cache."""


@cache.command()
@click.pass_obj
def stats(app: AppContext) -> None:
    """Count cached paths by freshness and degree."""
    app.emit(CacheService(app.workspace).stats())


@cache.command()
@click.pass_obj
def purge(app: AppContext) -> None:
    """Delete expired cache entries."""
    app.emit(CacheService(app.workspace).purge())
