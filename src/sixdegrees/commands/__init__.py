"""Subcommand modules for sixdegrees.

Provides register_commands() which uses deferred imports to keep
``sixdeg --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from sixdegrees.commands.cache import cache

    cli.add_command(cache)

    # --- Standalone commands ---
    from sixdegrees.commands.ingest import ingest
    from sixdegrees.commands.init_cmd import init_cmd
    from sixdegrees.commands.path import connections, path
    from sixdegrees.commands.warm import warm

    cli.add_command(init_cmd)
    cli.add_command(ingest)
    cli.add_command(path)
    cli.add_command(connections)
    cli.add_command(warm)
