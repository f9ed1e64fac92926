"""Shared pytest fixtures and test helpers for sixdegrees tests."""

from __future__ import annotations

from collections.abc import Generator, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import insert
from sqlalchemy.engine import Engine

from sixdegrees.config.settings import SixSettings
from sixdegrees.infrastructure.database.engine import init_database
from sixdegrees.infrastructure.database.schema import credits, people, works
from sixdegrees.infrastructure.workspace import Workspace

# ---------------------------------------------------------------------------
# Example graph
#
#   M1 = {A, B}   M2 = {B, C}   M3 = {C, D}   M4 = {E}
#
# A-B-C-D is a chain of three hops; E is credited but shares no work.
# ---------------------------------------------------------------------------

A, B, C, D, E = 1, 2, 3, 4, 5
M1, M2, M3, M4 = 10, 20, 30, 40

NAMES = {A: "Ava Adams", B: "Ben Brooks", C: "Cleo Chen", D: "Dev Das", E: "Eve Ellis"}
TITLES = {
    M1: ("First Light", 1999),
    M2: ("Second Wind", 2004),
    M3: ("Third Act", 2011),
    M4: ("Solo", 2020),
}

EXAMPLE_CREDITS: list[tuple[int, int]] = [
    (A, M1),
    (B, M1),
    (B, M2),
    (C, M2),
    (C, M3),
    (D, M3),
    (E, M4),
]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace directory (no config file: all defaults)."""
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> Workspace:
    """Workspace on a temp directory with an empty database."""
    settings = SixSettings.from_cli(workspace_root=workspace_root)
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def example_workspace(workspace: Workspace) -> Workspace:
    """Workspace seeded with the A-B-C-D chain plus isolated E."""
    seed_credits(workspace.engine, EXAMPLE_CREDITS)
    return workspace


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp workspace root so the CLI uses an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.delenv("SIXDEGREES_CONFIG", raising=False)
    monkeypatch.chdir(workspace_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def seed_credits(engine: Engine, pairs: Iterable[tuple[int, int]]) -> None:
    """Insert people, works and one credit per ``(person_id, work_id)`` pair.

    Names and titles come from :data:`NAMES`/:data:`TITLES` when known,
    otherwise they are generated from the ID.
    """
    pairs = list(pairs)
    person_ids = sorted({p for p, _ in pairs})
    work_ids = sorted({w for _, w in pairs})
    with engine.begin() as conn:
        conn.execute(
            insert(people),
            [{"id": pid, "name": NAMES.get(pid, f"Person {pid}")} for pid in person_ids],
        )
        conn.execute(
            insert(works),
            [
                {
                    "id": wid,
                    "title": TITLES.get(wid, (f"Work {wid}", None))[0],
                    "year": TITLES.get(wid, (f"Work {wid}", None))[1],
                }
                for wid in work_ids
            ],
        )
        conn.execute(
            insert(credits),
            [{"person_id": pid, "work_id": wid} for pid, wid in pairs],
        )


def write_credits_csv(path: Path, pairs: Iterable[tuple[int, int]]) -> Path:
    """Write *pairs* as a credits CSV and return its path."""
    lines = ["person_id,person_name,work_id,work_title,year"]
    for pid, wid in pairs:
        title, year = TITLES.get(wid, (f"Work {wid}", None))
        lines.append(
            f"{pid},{NAMES.get(pid, f'Person {pid}')},{wid},{title},{year if year else ''}"
        )
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` enables telemetry in the test thread; switch it off again."""
    yield
    from sixdegrees.services.telemetry import disable_telemetry

    disable_telemetry()
