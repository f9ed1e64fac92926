"""Path cache — durable, expiring store of computed shortest paths.

Rows are keyed by the ordered ``(from_person_id, to_person_id)`` pair.
Writes are upserts (``INSERT … ON CONFLICT DO UPDATE``) that replace the
whole row, so concurrent writers to one pair resolve last-writer-wins.
Expired rows are never deleted on the read path; they read as misses
until a later write overwrites them or :meth:`PathCache.purge_expired`
removes them.

Timestamps are stored as fixed-width ISO 8601 UTC text so string order
matches time order.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from sixdegrees.domain.errors import CacheError, CacheWriteError
from sixdegrees.domain.paths import MAX_DEGREE, CachedPath, canonical_pair, validate_cached_path
from sixdegrees.infrastructure.database.schema import cached_paths

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

DEFAULT_TTL = timedelta(days=7)

_REPLACED_COLUMNS = ("degree", "path", "computed_at", "expires_at")
_COUNT = select(func.count()).select_from(cached_paths)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _iso(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec="microseconds")


class PathCache:
    """Expiry-aware repository over the ``cached_paths`` table.

    Args:
        engine: SQLAlchemy engine with ``cached_paths`` created.
        ttl: Freshness window applied on every write.
        max_depth: Upper bound on stored degrees (capped at 6).
        normalize_pairs: Store (a, b) and (b, a) in one row under the
            sorted key, reversing the path as needed. Off by default:
            each direction is then an independent entry.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        ttl: timedelta = DEFAULT_TTL,
        max_depth: int = MAX_DEGREE,
        normalize_pairs: bool = False,
    ) -> None:
        self._engine = engine
        self._ttl = ttl
        self._max_depth = max_depth
        self._normalize = normalize_pairs

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def lookup(
        self, from_id: int, to_id: int, *, now: datetime | None = None
    ) -> CachedPath | None:
        """Return the fresh cached path for the pair, or None on a miss.

        Raises:
            CacheError: If the cache table cannot be read.
        """
        now = now or _utcnow()
        key_from, key_to = self._key(from_id, to_id)
        stmt = select(cached_paths).where(
            cached_paths.c.from_person_id == key_from,
            cached_paths.c.to_person_id == key_to,
            cached_paths.c.expires_at > _iso(now),
        )
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            msg = f"Cache lookup failed for ({from_id}, {to_id}): {exc}"
            raise CacheError(msg) from exc

        if row is None:
            return None

        path: list[int] = json.loads(row.path)
        if (key_from, key_to) != (from_id, to_id):
            path.reverse()
        return CachedPath(
            from_person_id=from_id,
            to_person_id=to_id,
            degree=row.degree,
            path=path,
            computed_at=datetime.fromisoformat(row.computed_at),
            expires_at=datetime.fromisoformat(row.expires_at),
        )

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def store(
        self,
        from_id: int,
        to_id: int,
        path: Sequence[int],
        *,
        now: datetime | None = None,
    ) -> CachedPath:
        """Validate and upsert *path* for the pair.

        Raises:
            PathValidationError: If the path breaks the cached-path invariants.
            CacheWriteError: If the row cannot be written.
        """
        degree = validate_cached_path(from_id, to_id, path, max_depth=self._max_depth)
        now = now or _utcnow()
        expires_at = now + self._ttl

        if self._normalize:
            key_from, key_to, key_path = canonical_pair(from_id, to_id, path)
        else:
            key_from, key_to, key_path = from_id, to_id, list(path)

        stmt = sqlite_insert(cached_paths).values(
            from_person_id=key_from,
            to_person_id=key_to,
            degree=degree,
            path=json.dumps(key_path),
            computed_at=_iso(now),
            expires_at=_iso(expires_at),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[cached_paths.c.from_person_id, cached_paths.c.to_person_id],
            set_={col: stmt.excluded[col] for col in _REPLACED_COLUMNS},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            msg = f"Cache write failed for ({from_id}, {to_id}): {exc}"
            raise CacheWriteError(msg) from exc

        return CachedPath(
            from_person_id=from_id,
            to_person_id=to_id,
            degree=degree,
            path=list(path),
            computed_at=now,
            expires_at=expires_at,
        )

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def purge_expired(self, *, now: datetime | None = None) -> int:
        """Delete rows whose freshness window has passed. Returns the count."""
        now = now or _utcnow()
        stmt = delete(cached_paths).where(cached_paths.c.expires_at <= _iso(now))
        try:
            with self._engine.begin() as conn:
                return conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            msg = f"Cache purge failed: {exc}"
            raise CacheWriteError(msg) from exc

    def count(self) -> int:
        """Total rows, fresh or not."""
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(_COUNT).scalar_one())
        except SQLAlchemyError as exc:
            msg = f"Cache count failed: {exc}"
            raise CacheError(msg) from exc

    def stats(self, *, now: datetime | None = None) -> dict[str, Any]:
        """Row counts: total, fresh, expired, and fresh rows per degree."""
        now_iso = _iso(now or _utcnow())
        fresh = cached_paths.c.expires_at > now_iso
        try:
            with self._engine.connect() as conn:
                total = int(conn.execute(_COUNT).scalar_one())
                fresh_count = int(conn.execute(_COUNT.where(fresh)).scalar_one())
                by_degree = {
                    row.degree: row.n
                    for row in conn.execute(
                        select(cached_paths.c.degree, func.count().label("n"))
                        .where(fresh)
                        .group_by(cached_paths.c.degree)
                        .order_by(cached_paths.c.degree)
                    )
                }
        except SQLAlchemyError as exc:
            msg = f"Cache stats failed: {exc}"
            raise CacheError(msg) from exc

        return {
            "total": total,
            "fresh": fresh_count,
            "expired": total - fresh_count,
            "by_degree": by_degree,
        }

    def _key(self, from_id: int, to_id: int) -> tuple[int, int]:
        if self._normalize and from_id > to_id:
            return to_id, from_id
        return from_id, to_id
