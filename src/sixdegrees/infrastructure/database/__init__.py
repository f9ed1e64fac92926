"""SQLite database engine and schema via SQLAlchemy Core."""

from sixdegrees.infrastructure.database.engine import create_db_engine, init_database
from sixdegrees.infrastructure.database.schema import (
    cached_paths,
    credits,
    metadata,
    people,
    works,
)

__all__ = [
    "cached_paths",
    "create_db_engine",
    "credits",
    "init_database",
    "metadata",
    "people",
    "works",
]
