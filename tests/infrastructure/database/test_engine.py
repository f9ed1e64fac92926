"""Tests for SQLite engine setup and schema."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect, insert, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from sixdegrees.infrastructure.database.engine import create_db_engine, init_database
from sixdegrees.infrastructure.database.schema import cached_paths, credits, people, works


class TestInitDatabase:
    def test_creates_parent_and_file(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "six.db"
        engine = init_database(db_path)
        try:
            assert db_path.exists()
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "six.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        try:
            tables = set(inspect(engine).get_table_names())
            assert {"people", "works", "credits", "cached_paths"} <= tables
        finally:
            engine.dispose()

    def test_wal_and_foreign_keys(self, db_engine: Engine) -> None:
        with db_engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_busy_timeout_applied(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "six.db", busy_timeout=2.5)
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 2500
        finally:
            engine.dispose()


class TestSchema:
    def test_indexes(self, db_engine: Engine) -> None:
        insp = inspect(db_engine)
        cache_indexes = {ix["name"] for ix in insp.get_indexes("cached_paths")}
        assert {"ix_cached_paths_expires", "ix_cached_paths_degree"} <= cache_indexes
        credit_indexes = {ix["name"] for ix in insp.get_indexes("credits")}
        assert {"ix_credits_person", "ix_credits_work"} <= credit_indexes

    def test_degree_check_constraint(self, db_engine: Engine) -> None:
        row = {
            "from_person_id": 1,
            "to_person_id": 9,
            "degree": 7,
            "path": "[]",
            "computed_at": "2025-01-01T00:00:00.000000+00:00",
            "expires_at": "2025-01-08T00:00:00.000000+00:00",
        }
        with pytest.raises(IntegrityError), db_engine.begin() as conn:
            conn.execute(insert(cached_paths).values(**row))

    def test_pair_unique(self, db_engine: Engine) -> None:
        row = {
            "from_person_id": 1,
            "to_person_id": 2,
            "degree": 1,
            "path": "[1, 2]",
            "computed_at": "2025-01-01T00:00:00.000000+00:00",
            "expires_at": "2025-01-08T00:00:00.000000+00:00",
        }
        with db_engine.begin() as conn:
            conn.execute(insert(cached_paths).values(**row))
        with pytest.raises(IntegrityError), db_engine.begin() as conn:
            conn.execute(insert(cached_paths).values(**row))

    def test_credit_requires_person(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            conn.execute(insert(works).values(id=1, title="Orphan"))
        with pytest.raises(IntegrityError), db_engine.begin() as conn:
            conn.execute(insert(credits).values(person_id=99, work_id=1))

    def test_credit_type_default(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            conn.execute(insert(people).values(id=1, name="P"))
            conn.execute(insert(works).values(id=1, title="W"))
            conn.execute(insert(credits).values(person_id=1, work_id=1))
            value = conn.execute(text("SELECT credit_type FROM credits")).scalar()
        assert value == "cast"
