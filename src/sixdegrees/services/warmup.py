"""WarmupService — precompute paths among the most-credited people.

The cohort is the ``cohort_size`` people with the most distinct works.
Every ordered pair (a, b), a != b, goes through the normal request path
one at a time, so entries land in the cache incrementally and a rerun
after a crash simply continues overwriting. One failing pair is logged
and counted; the batch moves on.

:class:`WarmupJob` runs the same batch on a worker thread with a
cancel flag and a progress queue.
"""

from __future__ import annotations

import itertools
import queue
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING

import structlog

from sixdegrees.domain.errors import LookupFailedError
from sixdegrees.services.base import BaseService
from sixdegrees.services.contracts import WarmupResultData, dump_validated
from sixdegrees.services.pathfinder import PathService
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import suppress_spans, trace_span, traced

if TYPE_CHECKING:
    from sixdegrees.infrastructure.workspace import Workspace

logger = structlog.get_logger(__name__)


@dataclass
class WarmupProgress:
    """Running counters for one warm-up batch."""

    pairs_total: int
    pairs_done: int = 0
    computed: int = 0
    cache_hits: int = 0
    not_found: int = 0
    failed: int = 0
    cancelled: bool = False

    def snapshot(self) -> WarmupProgress:
        return replace(self)

    def to_dict(self) -> dict[str, int | bool]:
        return asdict(self)


type ProgressCallback = Callable[[WarmupProgress], None]


class WarmupService(BaseService):
    """Fills the path cache for a popular cohort."""

    @traced
    def warm_cache(
        self,
        cohort_size: int | None = None,
        *,
        refresh: bool = False,
        cancel: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ServiceResult:
        """Compute and cache paths for all ordered pairs in the cohort.

        Args:
            cohort_size: Number of people to warm; defaults to
                ``warmup.cohort_size``.
            refresh: Recompute pairs even when a fresh entry exists.
            cancel: Checked before each pair; when set, the batch stops
                and the result reports ``cancelled``.
            on_progress: Called with a snapshot every
                ``warmup.progress_interval`` pairs and once at the end.
        """
        op = "warm_cache"
        size = self._settings.warmup.cohort_size if cohort_size is None else cohort_size
        if size < 1:
            return ServiceResult.failure(
                op, "INVALID_COHORT", f"cohort_size must be >= 1, got {size}", cohort_size=size
            )

        try:
            with trace_span("select_cohort"):
                cohort = self._workspace.catalog.top_people_by_credit_count(size)
        except LookupFailedError as exc:
            logger.warning("warmup.cohort_failed", error=str(exc))
            return ServiceResult.failure(
                op, "LOOKUP_FAILED", f"Could not select warm-up cohort: {exc}"
            )

        pairs = list(itertools.permutations(cohort, 2))
        progress = WarmupProgress(pairs_total=len(pairs))
        interval = self._settings.warmup.progress_interval
        paths = PathService(self._workspace)

        logger.info("warmup.started", cohort_size=len(cohort), pairs_total=len(pairs))

        with trace_span("warm_pairs") as span, suppress_spans():
            for from_id, to_id in pairs:
                if cancel is not None and cancel.is_set():
                    progress.cancelled = True
                    logger.info("warmup.cancelled", pairs_done=progress.pairs_done)
                    break

                self._warm_pair(paths, from_id, to_id, progress, refresh=refresh)
                progress.pairs_done += 1

                if progress.pairs_done % interval == 0:
                    logger.info("warmup.progress", **progress.to_dict())
                    if on_progress is not None:
                        on_progress(progress.snapshot())
            if span is not None:
                for key, value in progress.to_dict().items():
                    span.annotate(key, value)

        if on_progress is not None:
            on_progress(progress.snapshot())
        logger.info("warmup.finished", **progress.to_dict())

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                WarmupResultData,
                {"cohort_size": len(cohort), "cohort": cohort, **progress.to_dict()},
            ),
        )

    @staticmethod
    def _warm_pair(
        paths: PathService,
        from_id: int,
        to_id: int,
        progress: WarmupProgress,
        *,
        refresh: bool,
    ) -> None:
        """Run one pair through the request path and tally the outcome."""
        try:
            result = paths.find_shortest_path(from_id, to_id, refresh=refresh)
        except Exception:
            # One bad pair must not stop the batch.
            logger.exception("warmup.pair_crashed", from_id=from_id, to_id=to_id)
            progress.failed += 1
            return

        if result.ok:
            if result.data["cached"]:
                progress.cache_hits += 1
            else:
                progress.computed += 1
        elif result.error is not None and result.error.code == "NOT_FOUND":
            progress.not_found += 1
        else:
            progress.failed += 1
            logger.warning(
                "warmup.pair_failed",
                from_id=from_id,
                to_id=to_id,
                code=result.error.code if result.error else None,
            )


class WarmupJob:
    """Background warm-up with cooperative cancellation.

    The batch is submitted to a one-worker ``ThreadPoolExecutor``.
    Progress snapshots are pushed onto :attr:`updates`; ``None`` marks
    the end of the run. The final :class:`ServiceResult` comes from
    :meth:`join` or :attr:`result`.

    Usage::

        job = WarmupJob(workspace, cohort_size=20)
        job.start()
        while (update := job.updates.get()) is not None:
            print(update.pairs_done, "/", update.pairs_total)
        result = job.join()
    """

    def __init__(
        self,
        workspace: Workspace,
        cohort_size: int | None = None,
        *,
        refresh: bool = False,
    ) -> None:
        self._workspace = workspace
        self._cohort_size = cohort_size
        self._refresh = refresh
        self._cancel = threading.Event()
        self._future: Future[ServiceResult] | None = None
        self._latest: WarmupProgress | None = None
        self.updates: queue.Queue[WarmupProgress | None] = queue.Queue()

    @property
    def progress(self) -> WarmupProgress | None:
        """The most recent progress snapshot, if any."""
        return self._latest

    @property
    def result(self) -> ServiceResult | None:
        """The final result once the run has finished."""
        if self._future is None or not self._future.done():
            return None
        return self._future.result()

    @property
    def is_running(self) -> bool:
        return self._future is not None and not self._future.done()

    def start(self) -> None:
        """Submit the batch. Starting twice is an error."""
        if self._future is not None:
            msg = "WarmupJob already started"
            raise RuntimeError(msg)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sixdegrees-warmup")
        self._future = executor.submit(self._run)
        executor.shutdown(wait=False)

    def cancel(self) -> None:
        """Ask the batch to stop before its next pair."""
        self._cancel.set()

    def join(self, timeout: float | None = None) -> ServiceResult | None:
        """Wait for the batch and return its result; None on timeout."""
        if self._future is None:
            return None
        try:
            return self._future.result(timeout=timeout)
        except TimeoutError:
            return None

    def _publish(self, progress: WarmupProgress) -> None:
        self._latest = progress
        self.updates.put(progress)

    def _run(self) -> ServiceResult:
        try:
            return WarmupService(self._workspace).warm_cache(
                self._cohort_size,
                refresh=self._refresh,
                cancel=self._cancel,
                on_progress=self._publish,
            )
        except Exception as exc:
            logger.exception("warmup.job_crashed")
            return ServiceResult.failure("warm_cache", "WARMUP_FAILED", str(exc))
        finally:
            self.updates.put(None)
