"""GraphEngine — lazy-built bipartite NetworkX snapshot of the credits tables.

Person and work nodes are keyed ``("person", id)`` and ``("work", id)``;
each distinct credit becomes one person–work edge, so duplicate credits
collapse on load. The snapshot is quasi-static: it is built on first
access and only rebuilt after :meth:`GraphEngine.invalidate` (called
after ingest).
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import networkx as nx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from sixdegrees.domain.errors import LookupFailedError
from sixdegrees.infrastructure.database.schema import credits, people, works

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

type _Graph = nx.Graph
type _Node = tuple[str, int]

PERSON = "person"
WORK = "work"


class GraphEngine:
    """Lazy-loading bipartite graph backed by SQLite credit data."""

    def __init__(self, db: Engine) -> None:
        self._db = db
        self._graph: _Graph | None = None
        self._lock = threading.Lock()

    @property
    def graph(self) -> _Graph:
        """Return the graph, building from DB on first access."""
        with self._lock:
            if self._graph is None:
                self._graph = self._build_from_db()
            return self._graph

    def invalidate(self) -> None:
        """Clear the cached graph, forcing rebuild on next access."""
        with self._lock:
            self._graph = None

    def _build_from_db(self) -> _Graph:
        """Build the person–work graph.

        Loads people and works first (so uncredited entries still resolve
        for display), then adds one edge per credited pair.
        """
        g: _Graph = nx.Graph()
        try:
            with self._db.connect() as conn:
                for row in conn.execute(select(people.c.id, people.c.name)):
                    g.add_node((PERSON, row.id), bipartite=0, name=row.name)
                for row in conn.execute(select(works.c.id, works.c.title, works.c.year)):
                    g.add_node((WORK, row.id), bipartite=1, title=row.title, year=row.year)
                for row in conn.execute(select(credits.c.person_id, credits.c.work_id)):
                    g.add_edge((PERSON, row.person_id), (WORK, row.work_id))
        except SQLAlchemyError as exc:
            msg = f"Failed to build credits graph: {exc}"
            raise LookupFailedError(msg) from exc
        return g


class SnapshotCatalog:
    """:class:`~sixdegrees.infrastructure.catalog.Catalog` over a GraphEngine snapshot.

    Trades freshness for speed: adjacency is answered from memory, so a
    search never touches the database after the first build.
    """

    def __init__(self, engine: GraphEngine) -> None:
        self._engine = engine

    def _ids_adjacent_to(self, node: _Node) -> frozenset[int]:
        g = self._engine.graph
        if node not in g:
            return frozenset()
        return frozenset(other[1] for other in g.neighbors(node))

    def credits_of(self, person_id: int) -> frozenset[int]:
        return self._ids_adjacent_to((PERSON, person_id))

    def people_of(self, work_id: int) -> frozenset[int]:
        return self._ids_adjacent_to((WORK, work_id))

    def top_people_by_credit_count(self, n: int) -> list[int]:
        if n <= 0:
            return []
        g = self._engine.graph
        counts = [(g.degree(node), node[1]) for node in g.nodes if node[0] == PERSON]
        counts = [c for c in counts if c[0] > 0]
        counts.sort(key=lambda c: (-c[0], c[1]))
        return [person_id for _, person_id in counts[:n]]

    def any_shared_work(self, person_a: int, person_b: int) -> int | None:
        shared = self.credits_of(person_a) & self.credits_of(person_b)
        return min(shared) if shared else None

    def people_by_id(self, person_ids: Sequence[int]) -> dict[int, str]:
        g = self._engine.graph
        return {
            pid: g.nodes[(PERSON, pid)]["name"] for pid in person_ids if (PERSON, pid) in g
        }

    def works_by_id(self, work_ids: Sequence[int]) -> dict[int, dict[str, Any]]:
        g = self._engine.graph
        result: dict[int, dict[str, Any]] = {}
        for wid in work_ids:
            node = (WORK, wid)
            if node in g:
                attrs = g.nodes[node]
                result[wid] = {"title": attrs["title"], "year": attrs["year"]}
        return result
