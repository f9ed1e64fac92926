"""Command: workspace initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixCommand
from sixdegrees.services.init import InitService

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext

_INIT_EXAMPLES = """\
  sixdeg init
  sixdeg init /path/to/workspace
  sixdeg init . --force"""


@click.command("init", cls=SixCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--force", is_flag=True, help="Rewrite sixdegrees.toml with defaults.")
@click.pass_obj
def init_cmd(app: AppContext, path: str, force: bool) -> None:
    """Initialize a sixdegrees workspace (config file and database)."""
    app.emit(InitService.init_workspace(Path(path).resolve(), overwrite=force))
