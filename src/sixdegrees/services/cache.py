"""CacheService — inspection and maintenance of the path cache."""

from __future__ import annotations

import structlog

from sixdegrees.domain.errors import CacheError
from sixdegrees.services.base import BaseService
from sixdegrees.services.contracts import CacheStatsData, dump_validated
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import traced

logger = structlog.get_logger(__name__)


class CacheService(BaseService):
    """Reports on and purges cached paths."""

    @traced
    def stats(self) -> ServiceResult:
        """Count cached rows by freshness and degree."""
        try:
            counts = self._workspace.cache.stats()
        except CacheError as exc:
            return ServiceResult.failure("cache_stats", "CACHE_ERROR", str(exc))

        return ServiceResult(
            ok=True,
            op="cache_stats",
            data=dump_validated(
                CacheStatsData,
                {
                    **counts,
                    "ttl_days": self._settings.cache.ttl_days,
                    "normalize_pairs": self._settings.cache.normalize_pairs,
                },
            ),
        )

    @traced
    def purge(self) -> ServiceResult:
        """Delete expired rows. Fresh rows are untouched."""
        try:
            removed = self._workspace.cache.purge_expired()
        except CacheError as exc:
            return ServiceResult.failure("cache_purge", "CACHE_ERROR", str(exc))

        logger.info("cache.purged", removed=removed)
        return ServiceResult(ok=True, op="cache_purge", data={"removed": removed})
