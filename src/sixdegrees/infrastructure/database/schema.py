"""SQLAlchemy Core table definitions for the sixdegrees database.

``people``, ``works`` and ``credits`` form the catalog the engine reads
from. ``cached_paths`` is the only table the engine owns.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

people = Table(
    "people",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
)

works = Table(
    "works",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("title", Text, nullable=False),
    Column("year", Integer),
)

# Duplicate (person, work) rows are allowed: a person can hold several
# credits on one work. Adjacency collapses them.
credits = Table(
    "credits",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("person_id", Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False),
    Column("work_id", Integer, ForeignKey("works.id", ondelete="CASCADE"), nullable=False),
    Column("credit_type", Text, nullable=False, default="cast", server_default="cast"),
    Column("role", Text),  # character or job
)

# No foreign keys: the cache outlives catalog reloads and is keyed by ID only.
cached_paths = Table(
    "cached_paths",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("from_person_id", Integer, nullable=False),
    Column("to_person_id", Integer, nullable=False),
    Column("degree", Integer, nullable=False),
    Column("path", Text, nullable=False),  # JSON array of person IDs
    Column("computed_at", Text, nullable=False),
    Column("expires_at", Text, nullable=False),
    UniqueConstraint("from_person_id", "to_person_id"),
    CheckConstraint("degree BETWEEN 1 AND 6", name="valid_degree"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_credits_person", credits.c.person_id)
Index("ix_credits_work", credits.c.work_id)
Index("ix_cached_paths_expires", cached_paths.c.expires_at)
Index("ix_cached_paths_degree", cached_paths.c.degree, cached_paths.c.from_person_id)
