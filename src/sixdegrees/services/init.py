"""InitService — create a workspace: config file plus empty database."""

from __future__ import annotations

from pathlib import Path

from sixdegrees.config.discovery import CONFIG_FILENAME
from sixdegrees.config.models import SixConfig
from sixdegrees.infrastructure.database.engine import init_database
from sixdegrees.services.result import ServiceResult

_TOML_TEMPLATE = """\
# sixdegrees workspace configuration. Only overrides are needed;
# every value below is the built-in default.

[database]
path = "{db_path}"

[search]
max_depth = {max_depth}
snapshot = {snapshot}

[cache]
ttl_days = {ttl_days}
normalize_pairs = {normalize_pairs}

[warmup]
cohort_size = {cohort_size}
progress_interval = {progress_interval}
"""


def _toml_bool(value: bool) -> str:
    return "true" if value else "false"


class InitService:
    """Workspace bootstrap. Stateless: no Workspace exists yet."""

    @staticmethod
    def init_workspace(root: Path, *, overwrite: bool = False) -> ServiceResult:
        """Write ``sixdegrees.toml`` (unless present) and create the database.

        Idempotent: an existing config is left untouched unless
        *overwrite* is set, and the database schema is created only if
        missing.
        """
        op = "init_workspace"
        root.mkdir(parents=True, exist_ok=True)
        config_file = root / CONFIG_FILENAME
        defaults = SixConfig()

        files_created: list[str] = []
        if overwrite or not config_file.exists():
            config_file.write_text(
                _TOML_TEMPLATE.format(
                    db_path=defaults.database.path,
                    max_depth=defaults.search.max_depth,
                    snapshot=_toml_bool(defaults.search.snapshot),
                    ttl_days=defaults.cache.ttl_days,
                    normalize_pairs=_toml_bool(defaults.cache.normalize_pairs),
                    cohort_size=defaults.warmup.cohort_size,
                    progress_interval=defaults.warmup.progress_interval,
                ),
                encoding="utf-8",
            )
            files_created.append(CONFIG_FILENAME)

        db_path = root / defaults.database.path
        existed = db_path.exists()
        engine = init_database(db_path, busy_timeout=defaults.database.busy_timeout_s)
        engine.dispose()
        if not existed:
            files_created.append(defaults.database.path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "workspace_path": str(root),
                "config_path": str(config_file),
                "database_path": str(db_path),
                "files_created": files_created,
            },
        )
