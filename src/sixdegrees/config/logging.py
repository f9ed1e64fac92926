"""structlog setup: one stderr handler, console or JSON lines.

Application loggers sit at WARNING unless ``--verbose``. Warm-up
checkpoints (``warmup.started``, ``warmup.progress``, ``warmup.finished``)
are the batch job's only output besides its result, so the warm-up
logger stays at INFO in every mode.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

WARMUP_LOGGER = "sixdegrees.services.warmup"


class _StderrHandler(logging.StreamHandler):
    """StreamHandler that looks up ``sys.stderr`` on every write.

    Keeps records flowing to whatever stderr is current (a rich live
    display's proxy, or a test runner's capture buffer).
    """

    @property  # type: ignore[override]
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, _value: TextIO) -> None:
        pass


def _logger_levels(verbose: bool) -> dict[str, int]:
    app = logging.DEBUG if verbose else logging.WARNING
    return {
        "sixdegrees": app,
        WARMUP_LOGGER: min(app, logging.INFO),
        "sqlalchemy": logging.WARNING,
    }


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        verbose: DEBUG for every ``sixdegrees`` logger.
        log_json: Render JSON lines instead of console output.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = _StderrHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.WARNING)
    for name, level in _logger_levels(verbose).items():
        logging.getLogger(name).setLevel(level)
