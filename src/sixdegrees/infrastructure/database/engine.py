"""Database engine setup for SQLite with WAL mode.

WAL mode lets path lookups read while the warm-up job writes. The
driver-level busy timeout bounds how long any catalog or cache call can
wait on a locked database.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from sixdegrees.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path, *, busy_timeout: float = 5.0) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled.

    Connections may be used from the warm-up thread, so the driver's
    same-thread check is disabled; each connection is still checked out
    by one thread at a time through the pool.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path, *, busy_timeout: float = 5.0) -> Engine:
    """Initialize the database at *db_path*, creating parent directories.

    Idempotent — safe to call on an existing database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, busy_timeout=busy_timeout)
    metadata.create_all(engine)
    return engine
