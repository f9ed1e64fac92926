"""CatalogService — loading credits into the SQLite catalog.

The catalog is normally maintained elsewhere; CSV ingest exists so a
workspace can be populated for local use and testing.

Expected CSV header (extra columns ignored)::

    person_id,person_name,work_id,work_title[,year][,credit_type][,role]
"""

from __future__ import annotations

import csv
from pathlib import Path

import structlog
from sqlalchemy.exc import SQLAlchemyError

from sixdegrees.infrastructure.catalog import CreditRecord
from sixdegrees.services.base import BaseService
from sixdegrees.services.contracts import IngestResultData, dump_validated
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import trace_span, traced

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("person_id", "person_name", "work_id", "work_title")


def _optional_int(raw: str | None) -> int | None:
    raw = (raw or "").strip()
    return int(raw) if raw else None


def parse_credits_csv(path: Path) -> list[CreditRecord]:
    """Read credit records from *path*.

    Raises:
        ValueError: On a missing required column or a malformed row.
    """
    records: list[CreditRecord] = []
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            msg = f"missing required column(s): {', '.join(missing)}"
            raise ValueError(msg)

        for lineno, row in enumerate(reader, start=2):
            try:
                records.append(
                    CreditRecord(
                        person_id=int(row["person_id"]),
                        person_name=row["person_name"].strip(),
                        work_id=int(row["work_id"]),
                        work_title=row["work_title"].strip(),
                        year=_optional_int(row.get("year")),
                        credit_type=(row.get("credit_type") or "cast").strip(),
                        role=(row.get("role") or "").strip() or None,
                    )
                )
            except (TypeError, ValueError) as exc:
                msg = f"line {lineno}: {exc}"
                raise ValueError(msg) from exc
    return records


class CatalogService(BaseService):
    """Populates the credits catalog."""

    @traced
    def ingest_csv(self, path: Path) -> ServiceResult:
        """Load credits from a CSV file in one transaction."""
        op = "ingest"
        if not path.is_file():
            return ServiceResult.failure(op, "INGEST_FAILED", f"File not found: {path}")

        try:
            with trace_span("parse"):
                records = parse_credits_csv(path)
        except ValueError as exc:
            return ServiceResult.failure(op, "INGEST_FAILED", f"{path.name}: {exc}")

        try:
            with trace_span("write") as span:
                written = self._workspace.sql_catalog.add_credits(records)
                if span:
                    span.annotate("credits", written)
        except SQLAlchemyError as exc:
            logger.warning("ingest.write_failed", source=str(path), error=str(exc))
            return ServiceResult.failure(op, "INGEST_FAILED", f"Could not store credits: {exc}")

        # New credits change adjacency; drop the in-memory snapshot.
        self._workspace.graph.invalidate()

        logger.info("ingest.finished", source=str(path), credits=written)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                IngestResultData,
                {
                    "source": str(path),
                    "credits": written,
                    "people": len({r.person_id for r in records}),
                    "works": len({r.work_id for r in records}),
                },
            ),
        )
