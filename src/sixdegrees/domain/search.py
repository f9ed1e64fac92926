"""Bounded breadth-first search over the co-credit graph.

The graph is never materialized: each expanded person is resolved through
a *neighbors* callable (the adjacency provider). First discovery of the
target is a minimum-hop path. Neighbors are expanded in ascending ID
order so ties between equal-length paths resolve the same way on every
run.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sixdegrees.domain.paths import MAX_DEGREE

type NeighborFn = Callable[[int], Iterable[int]]


@dataclass
class SearchStats:
    """Counters collected during one search."""

    expanded: int = 0
    discovered: int = 0
    peak_frontier: int = 0


def shortest_path(
    source: int,
    target: int,
    neighbors: NeighborFn,
    *,
    max_depth: int = MAX_DEGREE,
    stats: SearchStats | None = None,
) -> list[int] | None:
    """Return a minimum-hop path from *source* to *target*, or None.

    Args:
        source: Starting person ID.
        target: Destination person ID.
        neighbors: Adjacency lookup; exceptions abort the search unchanged.
        max_depth: Maximum hops to explore (>= 1).
        stats: Optional counters, updated in place.

    Returns:
        ``[source]`` when source == target, the path when one exists
        within *max_depth* hops, otherwise None.
    """
    if max_depth < 1:
        msg = f"max_depth must be >= 1, got {max_depth}"
        raise ValueError(msg)
    if source == target:
        return [source]

    stats = stats if stats is not None else SearchStats()
    frontier: deque[tuple[int, list[int], int]] = deque([(source, [source], 0)])
    visited: set[int] = {source}

    while frontier:
        node, path, depth = frontier.popleft()
        if node == target:
            return path
        if depth >= max_depth:
            continue

        stats.expanded += 1
        for neighbor in sorted(neighbors(node)):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            frontier.append((neighbor, [*path, neighbor], depth + 1))
            stats.discovered += 1
        stats.peak_frontier = max(stats.peak_frontier, len(frontier))

    return None
