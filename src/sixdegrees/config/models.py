"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sixdegrees.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- sixdegrees.toml sections ---


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: str = ".sixdegrees/sixdegrees.db"  # relative to the workspace root
    busy_timeout_s: float = Field(default=5.0, gt=0)


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=6, ge=1, le=6)
    snapshot: bool = False


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    ttl_days: float = Field(default=7, gt=0)
    normalize_pairs: bool = False


class WarmupConfig(BaseModel):
    """[warmup] section."""

    model_config = {"frozen": True}

    cohort_size: int = Field(default=50, ge=1)
    progress_interval: int = Field(default=100, ge=1)


class SixConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    warmup: WarmupConfig = Field(default_factory=WarmupConfig)
