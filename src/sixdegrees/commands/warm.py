"""Command: precompute cached paths for the most-credited people."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from sixdegrees.commands._base import SixCommand
from sixdegrees.output.console import create_progress_console
from sixdegrees.services.warmup import WarmupJob, WarmupService

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext
    from sixdegrees.services.result import ServiceResult


def _run_with_progress(job: WarmupJob) -> ServiceResult | None:
    """Drive *job* while drawing a progress bar on stderr.

    Ctrl-C cancels the batch; pairs already cached stay cached.
    """
    columns = (
        TextColumn("[six.op]warming cache"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
    )
    with Progress(*columns, console=create_progress_console(), transient=True) as bar:
        task = bar.add_task("warm", total=None)
        job.start()
        try:
            while (update := job.updates.get()) is not None:
                bar.update(task, total=update.pairs_total, completed=update.pairs_done)
        except KeyboardInterrupt:
            job.cancel()
    return job.join()


@click.command(
    cls=SixCommand,
    examples="""\
  sixdeg warm
  sixdeg warm --cohort-size 20
  sixdeg warm --refresh
  sixdeg --json warm --cohort-size 100""",
)
@click.option("--cohort-size", default=None, type=int, help="People to warm (default from config).")
@click.option("--refresh", is_flag=True, help="Recompute pairs that are already cached.")
@click.pass_obj
def warm(app: AppContext, cohort_size: int | None, refresh: bool) -> None:
    """Cache paths between every pair of the most-credited people."""
    settings = app.output_settings
    if settings.json_output or settings.quiet:
        app.emit(WarmupService(app.workspace).warm_cache(cohort_size, refresh=refresh))
        return

    job = WarmupJob(app.workspace, cohort_size, refresh=refresh)
    result = _run_with_progress(job)
    if result is None:
        raise click.ClickException("warm-up did not finish")
    app.emit(result)
