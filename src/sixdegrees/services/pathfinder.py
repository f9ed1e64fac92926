"""PathService — cached shortest-path lookups and hop enrichment.

Request flow for ``find_shortest_path``:

1. Fresh cache hit → return it (``cached: true``).
2. Miss or stale → bounded BFS through the adjacency provider.
3. Found → store it. Cache failures are logged and reported as warnings;
   they never turn a computed path into an error.
4. Not found → ``NOT_FOUND``; nothing is cached, so graph changes are
   picked up without waiting out a TTL.

Catalog failures abort the search and surface as ``LOOKUP_FAILED``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from sixdegrees.domain.errors import (
    CacheError,
    CacheWriteError,
    LookupFailedError,
    PathValidationError,
)
from sixdegrees.domain.paths import degree_of, hops
from sixdegrees.domain.search import SearchStats, shortest_path
from sixdegrees.services.base import BaseService
from sixdegrees.services.contracts import ConnectionsResultData, PathResultData, dump_validated
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sixdegrees.domain.paths import CachedPath

logger = structlog.get_logger(__name__)


class PathService(BaseService):
    """Finds and explains degrees of separation between two people."""

    # ------------------------------------------------------------------
    # find_shortest_path
    # ------------------------------------------------------------------

    @traced
    def find_shortest_path(
        self,
        from_id: int,
        to_id: int,
        max_depth: int | None = None,
        *,
        refresh: bool = False,
    ) -> ServiceResult:
        """Find the shortest co-credit path from *from_id* to *to_id*.

        Args:
            from_id: Source person ID.
            to_id: Target person ID.
            max_depth: Hop limit; defaults to ``search.max_depth``.
            refresh: Skip the cache lookup and recompute (the result is
                still stored).
        """
        op = "find_shortest_path"
        limit = self._settings.search.max_depth
        depth = limit if max_depth is None else max_depth
        if not 1 <= depth <= limit:
            return ServiceResult.failure(
                op,
                "INVALID_DEPTH",
                f"max_depth must be between 1 and {limit}, got {depth}",
                max_depth=depth,
            )

        # Same person: zero hops, never cached (cached paths need >= 1 hop).
        if from_id == to_id:
            return self._path_result(op, from_id, to_id, [from_id], cached=False)

        warnings: list[str] = []

        if not refresh:
            with trace_span("cache_lookup") as span:
                hit = self._lookup(from_id, to_id, warnings)
                if span:
                    span.annotate("hit", hit is not None)
            if hit is not None:
                # A cached path is a shortest path: longer than the limit
                # means nothing shorter exists either.
                if hit.degree > depth:
                    return self._not_found(op, from_id, to_id, depth, warnings)
                return self._path_result(
                    op, from_id, to_id, hit.path, cached=True, warnings=warnings
                )

        adjacency = self._workspace.adjacency
        stats = SearchStats()
        with trace_span("bfs") as span:
            try:
                path = shortest_path(
                    from_id, to_id, adjacency.neighbors, max_depth=depth, stats=stats
                )
            except LookupFailedError as exc:
                logger.warning(
                    "path.lookup_failed",
                    from_id=from_id,
                    to_id=to_id,
                    person_id=exc.person_id,
                    error=str(exc),
                )
                return ServiceResult.failure(
                    op,
                    "LOOKUP_FAILED",
                    f"Catalog lookup failed while searching {from_id} -> {to_id}",
                    warnings=warnings,
                    person_id=exc.person_id,
                    reason=str(exc),
                )
            finally:
                if span:
                    span.annotate("expanded", stats.expanded)
                    span.annotate("discovered", stats.discovered)
                    span.annotate("peak_frontier", stats.peak_frontier)

        if path is None:
            return self._not_found(op, from_id, to_id, depth, warnings)

        with trace_span("cache_store"):
            self._store(from_id, to_id, path, warnings)

        logger.debug(
            "path.computed",
            from_id=from_id,
            to_id=to_id,
            degree=degree_of(path),
            expanded=stats.expanded,
        )
        return self._path_result(op, from_id, to_id, path, cached=False, warnings=warnings)

    # ------------------------------------------------------------------
    # find_path_with_movies: the work behind each hop
    # ------------------------------------------------------------------

    @traced
    def find_path_with_movies(self, from_id: int, to_id: int) -> ServiceResult:
        """Find the shortest path and annotate every hop with a shared work.

        Errors from the path lookup pass through unchanged (with this op
        name). A same-person request yields an empty connection list.
        """
        op = "find_path_with_movies"
        found = self.find_shortest_path(from_id, to_id)
        if not found.ok:
            return found.model_copy(update={"op": op})

        path: list[int] = found.data["path"]
        warnings = list(found.warnings)

        try:
            with trace_span("enrich") as span:
                linked = self.with_connections(path)
                if span:
                    span.annotate("hops", len(linked))
        except LookupFailedError as exc:
            return ServiceResult.failure(
                op,
                "LOOKUP_FAILED",
                f"Catalog lookup failed while resolving works for {from_id} -> {to_id}",
                warnings=warnings,
                person_id=exc.person_id,
                reason=str(exc),
            )

        work_ids = sorted({w for _, w, _ in linked if w is not None})
        names, works = self._display_data(path, work_ids, warnings)

        connections: list[dict[str, Any]] = []
        for a, work_id, b in linked:
            if work_id is None:
                warnings.append(f"No shared work found between {a} and {b}")
            work = works.get(work_id, {}) if work_id is not None else {}
            connections.append(
                {
                    "from_person_id": a,
                    "work_id": work_id,
                    "to_person_id": b,
                    "from_name": names.get(a),
                    "to_name": names.get(b),
                    "work_title": work.get("title"),
                    "work_year": work.get("year"),
                }
            )

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ConnectionsResultData,
                {
                    "from_person_id": from_id,
                    "to_person_id": to_id,
                    "degree": found.data["degree"],
                    "cached": found.data["cached"],
                    "connections": connections,
                },
            ),
            warnings=warnings,
        )

    def with_connections(self, path: Sequence[int]) -> list[tuple[int, int | None, int]]:
        """Resolve some shared work for each consecutive pair in *path*.

        Any qualifying work is acceptable. Paths shorter than two people
        have no hops. Nothing is cached; every call reads the catalog.

        Raises:
            LookupFailedError: Propagated from the catalog.
        """
        catalog = self._workspace.catalog
        return [(a, catalog.any_shared_work(a, b), b) for a, b in hops(path)]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(self, from_id: int, to_id: int, warnings: list[str]) -> CachedPath | None:
        try:
            return self._workspace.cache.lookup(from_id, to_id)
        except CacheError as exc:
            logger.warning("cache.read_failed", from_id=from_id, to_id=to_id, error=str(exc))
            warnings.append(f"Cache lookup failed: {exc}")
            return None

    def _store(self, from_id: int, to_id: int, path: list[int], warnings: list[str]) -> None:
        try:
            self._workspace.cache.store(from_id, to_id, path)
        except PathValidationError as exc:
            logger.error(
                "cache.invalid_path",
                from_id=from_id,
                to_id=to_id,
                path=exc.path,
                error=str(exc),
            )
            warnings.append(f"Computed path not cached: {exc}")
        except CacheWriteError as exc:
            logger.warning("cache.write_failed", from_id=from_id, to_id=to_id, error=str(exc))
            warnings.append(f"Computed path not cached: {exc}")

    def _display_data(
        self,
        path: list[int],
        work_ids: list[int],
        warnings: list[str],
    ) -> tuple[dict[int, str], dict[int, dict[str, Any]]]:
        catalog = self._workspace.catalog
        try:
            return catalog.people_by_id(path), catalog.works_by_id(work_ids)
        except LookupFailedError as exc:
            logger.warning("path.display_lookup_failed", error=str(exc))
            warnings.append(f"Display names unavailable: {exc}")
            return {}, {}

    @staticmethod
    def _not_found(
        op: str, from_id: int, to_id: int, depth: int, warnings: list[str]
    ) -> ServiceResult:
        logger.debug("path.not_found", from_id=from_id, to_id=to_id, max_depth=depth)
        return ServiceResult.failure(
            op,
            "NOT_FOUND",
            f"No path between {from_id} and {to_id} within {depth} hops",
            warnings=warnings,
            from_person_id=from_id,
            to_person_id=to_id,
            max_depth=depth,
        )

    @staticmethod
    def _path_result(
        op: str,
        from_id: int,
        to_id: int,
        path: list[int],
        *,
        cached: bool,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                PathResultData,
                {
                    "from_person_id": from_id,
                    "to_person_id": to_id,
                    "degree": degree_of(path),
                    "path": path,
                    "cached": cached,
                },
            ),
            warnings=warnings or [],
        )
