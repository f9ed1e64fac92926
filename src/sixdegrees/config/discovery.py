"""Where a workspace's ``sixdegrees.toml`` lives.

Lookup order: an explicit ``--config`` path, then ``SIXDEGREES_CONFIG``,
then the nearest ``sixdegrees.toml`` in the start directory or any of its
parents. The workspace root is the directory holding the file found.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "sixdegrees.toml"
CONFIG_ENV_VAR = "SIXDEGREES_CONFIG"


def _candidates(start: Path) -> Iterator[Path]:
    here = start.resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Nearest config file at or above *start* (default: CWD).

    ``SIXDEGREES_CONFIG`` short-circuits the walk; when it names a missing
    file, no config is used.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((c for c in _candidates(start or Path.cwd()) if c.is_file()), None)


def resolve_workspace(
    config_path: str | None = None, start: Path | None = None
) -> tuple[Path | None, Path]:
    """Return ``(config_file, workspace_root)`` for one invocation.

    An explicit *config_path* that does not exist means defaults only.
    A given *start* is the root no matter where the config was found.
    """
    if config_path:
        explicit = Path(config_path)
        toml_path = explicit if explicit.is_file() else None
    else:
        toml_path = find_config(start)

    if start is not None:
        return toml_path, start
    return toml_path, toml_path.parent if toml_path else Path.cwd()
