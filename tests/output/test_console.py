"""Tests for the Rich console factory."""

from __future__ import annotations

import sys

from sixdegrees.output.console import create_console, create_progress_console, get_output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("[six.ok]OK[/six.ok] hello")
        assert get_output(console) == "OK hello\n"

    def test_default_width(self) -> None:
        assert create_console().width == 120
        assert create_console(width=60).width == 60

    def test_progress_console_targets_stderr(self) -> None:
        assert create_progress_console().file is sys.stderr
