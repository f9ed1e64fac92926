"""Tests for SixSettings — unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from sixdegrees.config.settings import SixSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("SIXDEGREES_CONFIG", "SIXDEGREES_SEARCH__MAX_DEPTH", "SIXDEGREES_CACHE__TTL_DAYS"):
        monkeypatch.delenv(var, raising=False)


class TestSixSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = SixSettings.from_cli(workspace_root=tmp_path)
        assert settings.workspace_root == tmp_path
        assert settings.json_output is False
        assert settings.search.max_depth == 6
        assert settings.search.snapshot is False
        assert settings.cache.ttl_days == 7
        assert settings.cache.normalize_pairs is False
        assert settings.warmup.cohort_size == 50
        assert settings.warmup.progress_interval == 100

    def test_database_path_relative_to_root(self, tmp_path: Path) -> None:
        settings = SixSettings.from_cli(workspace_root=tmp_path)
        assert settings.database_path == tmp_path / ".sixdegrees" / "sixdegrees.db"

    def test_database_path_absolute(self, tmp_path: Path) -> None:
        db = tmp_path / "elsewhere.db"
        (tmp_path / "sixdegrees.toml").write_text(f'[database]\npath = "{db.as_posix()}"\n')
        settings = SixSettings.from_cli(workspace_root=tmp_path)
        assert settings.database_path == db

    def test_frozen(self, tmp_path: Path) -> None:
        settings = SixSettings.from_cli(workspace_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "sixdegrees.toml").write_text(
            "[search]\nmax_depth = 4\n[cache]\nnormalize_pairs = true\n"
        )
        settings = SixSettings.from_cli(workspace_root=tmp_path)
        assert settings.search.max_depth == 4
        assert settings.cache.normalize_pairs is True
        assert settings.cache.ttl_days == 7  # default preserved
        assert settings.config_path == tmp_path / "sixdegrees.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "six.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[warmup]\ncohort_size = 5\n")
        settings = SixSettings.from_cli(config_path=str(custom), workspace_root=tmp_path)
        assert settings.warmup.cohort_size == 5
        assert settings.config_path == custom

    def test_workspace_root_from_config_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "sixdegrees.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = SixSettings.from_cli()
        assert settings.workspace_root == tmp_path

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "sixdegrees.toml").write_text("[search\nmax_depth = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            SixSettings.from_cli(workspace_root=tmp_path)

    def test_out_of_range_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "sixdegrees.toml").write_text("[search]\nmax_depth = 7\n")
        with pytest.raises(Exception):
            SixSettings.from_cli(workspace_root=tmp_path)


class TestEnvAndFlags:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "sixdegrees.toml").write_text("[search]\nmax_depth = 4\n")
        monkeypatch.setenv("SIXDEGREES_SEARCH__MAX_DEPTH", "3")
        settings = SixSettings.from_cli(workspace_root=tmp_path)
        assert settings.search.max_depth == 3

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = SixSettings.from_cli(
            workspace_root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
