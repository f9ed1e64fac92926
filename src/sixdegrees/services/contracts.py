"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``path`` vs ``steps``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class PathResultData(BaseModel):
    """Payload contract for ``PathService.find_shortest_path``."""

    from_person_id: int
    to_person_id: int
    degree: int
    path: list[int]
    cached: bool


class ConnectionItem(BaseModel):
    """One hop of an enriched path: two people and a work they share."""

    model_config = ConfigDict(extra="allow")

    from_person_id: int
    work_id: int | None
    to_person_id: int
    from_name: str | None = None
    to_name: str | None = None
    work_title: str | None = None
    work_year: int | None = None


class ConnectionsResultData(BaseModel):
    """Payload contract for ``PathService.find_path_with_movies``."""

    from_person_id: int
    to_person_id: int
    degree: int
    cached: bool
    connections: list[ConnectionItem]


class WarmupResultData(BaseModel):
    """Payload contract for ``WarmupService.warm_cache``."""

    cohort_size: int
    cohort: list[int]
    pairs_total: int
    pairs_done: int
    computed: int
    cache_hits: int
    not_found: int
    failed: int
    cancelled: bool


class CacheStatsData(BaseModel):
    """Payload contract for ``CacheService.stats``."""

    total: int
    fresh: int
    expired: int
    by_degree: dict[int, int]
    ttl_days: float
    normalize_pairs: bool


class IngestResultData(BaseModel):
    """Payload contract for ``CatalogService.ingest_csv``."""

    source: str
    credits: int
    people: int
    works: int
