"""Catalog contract and its SQLite adapter.

The catalog owns people, works and credits. The path engine only reads
it through the narrow :class:`Catalog` protocol; every adapter reports
store failures as :class:`LookupFailedError` so callers can tell a broken
lookup from a missing path.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import distinct, func, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from sixdegrees.domain.errors import LookupFailedError
from sixdegrees.infrastructure.database.schema import credits, people, works

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql import Executable


class Catalog(Protocol):
    """Read contract the path engine consumes."""

    def credits_of(self, person_id: int) -> frozenset[int]:
        """Distinct work IDs *person_id* is credited on."""
        ...

    def people_of(self, work_id: int) -> frozenset[int]:
        """Distinct person IDs credited on *work_id*."""
        ...

    def top_people_by_credit_count(self, n: int) -> list[int]:
        """The *n* people with the most distinct works, most first."""
        ...

    def any_shared_work(self, person_a: int, person_b: int) -> int | None:
        """Some work both people are credited on, or None."""
        ...

    def people_by_id(self, person_ids: Sequence[int]) -> dict[int, str]:
        """Display names keyed by person ID (unknown IDs are omitted)."""
        ...

    def works_by_id(self, work_ids: Sequence[int]) -> dict[int, dict[str, Any]]:
        """``{"title", "year"}`` keyed by work ID (unknown IDs are omitted)."""
        ...


@dataclass(frozen=True)
class CreditRecord:
    """One (person, work) credit with the display data needed to store it."""

    person_id: int
    person_name: str
    work_id: int
    work_title: str
    year: int | None = None
    credit_type: str = "cast"
    role: str | None = None


class SqlCatalog:
    """:class:`Catalog` backed by the ``people``/``works``/``credits`` tables."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Catalog protocol
    # ------------------------------------------------------------------

    def credits_of(self, person_id: int) -> frozenset[int]:
        stmt = select(distinct(credits.c.work_id)).where(credits.c.person_id == person_id)
        return frozenset(row[0] for row in self._fetch(stmt, person_id=person_id))

    def people_of(self, work_id: int) -> frozenset[int]:
        stmt = select(distinct(credits.c.person_id)).where(credits.c.work_id == work_id)
        return frozenset(row[0] for row in self._fetch(stmt))

    def top_people_by_credit_count(self, n: int) -> list[int]:
        if n <= 0:
            return []
        work_count = func.count(distinct(credits.c.work_id))
        stmt = (
            select(credits.c.person_id, work_count.label("work_count"))
            .group_by(credits.c.person_id)
            .order_by(work_count.desc(), credits.c.person_id)
            .limit(n)
        )
        return [row.person_id for row in self._fetch(stmt)]

    def any_shared_work(self, person_a: int, person_b: int) -> int | None:
        c1 = credits.alias("c1")
        c2 = credits.alias("c2")
        stmt = (
            select(func.min(c1.c.work_id))
            .select_from(c1.join(c2, c1.c.work_id == c2.c.work_id))
            .where(c1.c.person_id == person_a, c2.c.person_id == person_b)
        )
        rows = self._fetch(stmt, person_id=person_a)
        return rows[0][0] if rows else None

    def people_by_id(self, person_ids: Sequence[int]) -> dict[int, str]:
        if not person_ids:
            return {}
        stmt = select(people.c.id, people.c.name).where(people.c.id.in_(list(person_ids)))
        return {row.id: row.name for row in self._fetch(stmt)}

    def works_by_id(self, work_ids: Sequence[int]) -> dict[int, dict[str, Any]]:
        if not work_ids:
            return {}
        stmt = select(works.c.id, works.c.title, works.c.year).where(
            works.c.id.in_(list(work_ids))
        )
        return {row.id: {"title": row.title, "year": row.year} for row in self._fetch(stmt)}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def add_credits(self, records: Iterable[CreditRecord]) -> int:
        """Insert credits, upserting the people and works they reference.

        Runs in a single transaction. Returns the number of credit rows
        written.
        """
        count = 0
        with self._engine.begin() as conn:
            for rec in records:
                person_stmt = sqlite_insert(people).values(id=rec.person_id, name=rec.person_name)
                conn.execute(
                    person_stmt.on_conflict_do_update(
                        index_elements=[people.c.id],
                        set_={"name": person_stmt.excluded.name},
                    )
                )
                work_stmt = sqlite_insert(works).values(
                    id=rec.work_id, title=rec.work_title, year=rec.year
                )
                conn.execute(
                    work_stmt.on_conflict_do_update(
                        index_elements=[works.c.id],
                        set_={"title": work_stmt.excluded.title, "year": work_stmt.excluded.year},
                    )
                )
                conn.execute(
                    insert(credits).values(
                        person_id=rec.person_id,
                        work_id=rec.work_id,
                        credit_type=rec.credit_type,
                        role=rec.role,
                    )
                )
                count += 1
        return count

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fetch(self, stmt: Executable, *, person_id: int | None = None) -> list[Any]:
        try:
            with self._engine.connect() as conn:
                return list(conn.execute(stmt).all())
        except SQLAlchemyError as exc:
            msg = f"Catalog query failed: {exc}"
            raise LookupFailedError(msg, person_id=person_id) from exc
