"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Generator

import pytest
import structlog

from sixdegrees.config.logging import WARMUP_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    saved = {name: logging.getLogger(name).level for name in ("sixdegrees", WARMUP_LOGGER)}
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("sixdegrees").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("sixdegrees").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("sixdegrees.test")
        log.warning("cache.write_failed", from_id=1, to_id=4)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "cache.write_failed"
        assert parsed["from_id"] == 1
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "sixdegrees.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sixdegrees.infrastructure.workspace").debug("Workspace opened")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Workspace opened"
        assert parsed["level"] == "debug"

    def test_sqlalchemy_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine").info("SELECT 1")
        assert capfd.readouterr().err == ""

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("sixdegrees.test").info("path.computed")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=False)
        configure_logging(verbose=False)
        assert len(logging.getLogger().handlers) == 1

    def test_warmup_checkpoints_visible_by_default(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=False, log_json=True)
        assert logging.getLogger(WARMUP_LOGGER).level == logging.INFO
        structlog.get_logger(WARMUP_LOGGER).info("warmup.progress", pairs_done=10)
        structlog.get_logger(WARMUP_LOGGER).debug("warmup.noise")
        lines = capfd.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["warmup.progress"]

    def test_handler_follows_current_stderr(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        configure_logging(verbose=False, log_json=True)
        swapped = io.StringIO()
        monkeypatch.setattr(sys, "stderr", swapped)
        structlog.get_logger("sixdegrees.test").warning("cache.write_failed")
        assert json.loads(swapped.getvalue())["event"] == "cache.write_failed"
