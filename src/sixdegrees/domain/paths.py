"""Path rules and the CachedPath model.

A path is an ordered list of person IDs. Consecutive entries share at
least one work. The degree of a path is its hop count.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from itertools import pairwise

from pydantic import BaseModel

from sixdegrees.domain.errors import PathValidationError

# Hard ceiling on stored degrees; mirrors the CHECK constraint on cached_paths.
MAX_DEGREE = 6


class CachedPath(BaseModel):
    """A persisted shortest path for one ordered (from, to) pair."""

    model_config = {"frozen": True}

    from_person_id: int
    to_person_id: int
    degree: int
    path: list[int]
    computed_at: datetime
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at


def degree_of(path: Sequence[int]) -> int:
    """Number of hops in *path* (0 for a single-person path)."""
    return max(len(path) - 1, 0)


def hops(path: Sequence[int]) -> list[tuple[int, int]]:
    """Consecutive (a, b) pairs along *path*."""
    return list(pairwise(path))


def validate_cached_path(
    from_id: int,
    to_id: int,
    path: Sequence[int],
    *,
    max_depth: int = MAX_DEGREE,
) -> int:
    """Check the write invariants for a cached path and return its degree.

    Raises:
        PathValidationError: If the path has fewer than two people, does
            not run from *from_id* to *to_id*, or its degree falls outside
            ``[1, max_depth]``.
    """
    steps = list(path)
    if len(steps) < 2:
        msg = "path must have at least 2 people"
        raise PathValidationError(msg, from_id=from_id, to_id=to_id, path=steps)
    if steps[0] != from_id or steps[-1] != to_id:
        msg = f"path must start with {from_id} and end with {to_id}"
        raise PathValidationError(msg, from_id=from_id, to_id=to_id, path=steps)

    degree = degree_of(steps)
    limit = min(max_depth, MAX_DEGREE)
    if not 1 <= degree <= limit:
        msg = f"degree {degree} outside [1, {limit}]"
        raise PathValidationError(msg, from_id=from_id, to_id=to_id, path=steps)
    return degree


def canonical_pair(from_id: int, to_id: int, path: Sequence[int]) -> tuple[int, int, list[int]]:
    """Orient a pair and its path so the smaller ID comes first.

    Used when undirected pairs share one cache row.
    """
    if from_id <= to_id:
        return from_id, to_id, list(path)
    return to_id, from_id, list(reversed(path))
