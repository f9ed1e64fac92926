"""Adjacency provider — people who share at least one work.

Composes the catalog's ``credits_of`` and ``people_of`` reads. Holds no
per-search state, so one provider can serve concurrent searches.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sixdegrees.infrastructure.catalog import Catalog


class AdjacencyProvider:
    """Read-through neighbor lookup over a :class:`Catalog`.

    ``calls`` counts :meth:`neighbors` invocations; the service layer
    reports it in telemetry and tests use it to prove cache hits skip
    the search.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._calls = 0
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return self._calls

    def neighbors(self, person_id: int) -> frozenset[int]:
        """Distinct co-credited people, excluding *person_id* itself.

        Raises:
            LookupFailedError: Propagated unchanged from the catalog.
        """
        with self._lock:
            self._calls += 1

        connected: set[int] = set()
        for work_id in self._catalog.credits_of(person_id):
            connected.update(self._catalog.people_of(work_id))
        connected.discard(person_id)
        return frozenset(connected)
