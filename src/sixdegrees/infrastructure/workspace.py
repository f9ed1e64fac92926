"""Workspace — the single dependency injected into every service.

Owns the database engine and wires the catalog adapter, adjacency
provider and path cache from :class:`SixSettings`. Constructed once per
CLI invocation (or test) and closed when done.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from sixdegrees.infrastructure.catalog import SqlCatalog
from sixdegrees.infrastructure.database.engine import init_database
from sixdegrees.infrastructure.graph.adjacency import AdjacencyProvider
from sixdegrees.infrastructure.graph.engine import GraphEngine, SnapshotCatalog
from sixdegrees.infrastructure.repositories.path_cache import PathCache

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from sixdegrees.config.settings import SixSettings
    from sixdegrees.infrastructure.catalog import Catalog

logger = logging.getLogger(__name__)


class Workspace:
    """Repository holder for catalog, adjacency, and cache access.

    With ``search.snapshot`` enabled, reads go through an in-memory
    NetworkX snapshot instead of per-lookup SQL.
    """

    def __init__(self, settings: SixSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.database_path,
            busy_timeout=settings.database.busy_timeout_s,
        )
        self._sql_catalog = SqlCatalog(self._engine)
        self._graph = GraphEngine(self._engine)
        self._catalog: Catalog = (
            SnapshotCatalog(self._graph) if settings.search.snapshot else self._sql_catalog
        )
        self._adjacency = AdjacencyProvider(self._catalog)
        self._cache = PathCache(
            self._engine,
            ttl=timedelta(days=settings.cache.ttl_days),
            max_depth=settings.search.max_depth,
            normalize_pairs=settings.cache.normalize_pairs,
        )
        logger.debug(
            "Workspace opened at %s (snapshot=%s)",
            settings.database_path,
            settings.search.snapshot,
        )

    @property
    def root(self) -> Path:
        """The workspace root directory."""
        return self._settings.workspace_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> SixSettings:
        """The resolved settings for this workspace."""
        return self._settings

    @property
    def catalog(self) -> Catalog:
        """The catalog adapter searches read from."""
        return self._catalog

    @property
    def sql_catalog(self) -> SqlCatalog:
        """The SQL adapter (always available, used for loading)."""
        return self._sql_catalog

    @property
    def graph(self) -> GraphEngine:
        """The bipartite snapshot engine (lazy-built from credits)."""
        return self._graph

    @property
    def adjacency(self) -> AdjacencyProvider:
        """The shared adjacency provider."""
        return self._adjacency

    @property
    def cache(self) -> PathCache:
        """The path cache repository."""
        return self._cache

    def close(self) -> None:
        """Dispose of pooled database connections."""
        self._engine.dispose()
