"""Tests for the bounded breadth-first search."""

from __future__ import annotations

import itertools
import random

import networkx as nx
import pytest

from sixdegrees.domain.errors import LookupFailedError
from sixdegrees.domain.paths import hops
from sixdegrees.domain.search import SearchStats, shortest_path

# ── Helpers ───────────────────────────────────────────────────────────


def _adjacency(edges: list[tuple[int, int]]) -> dict[int, set[int]]:
    adj: dict[int, set[int]] = {}
    for a, b in edges:
        adj.setdefault(a, set()).add(b)
        adj.setdefault(b, set()).add(a)
    return adj


def _neighbors_from(adj: dict[int, set[int]]):
    def neighbors(person_id: int) -> set[int]:
        return adj.get(person_id, set())

    return neighbors


CHAIN = _adjacency([(1, 2), (2, 3), (3, 4)])


class TestExampleGraph:
    def test_three_hops(self) -> None:
        assert shortest_path(1, 4, _neighbors_from(CHAIN)) == [1, 2, 3, 4]

    def test_two_hops(self) -> None:
        assert shortest_path(1, 3, _neighbors_from(CHAIN)) == [1, 2, 3]

    def test_unreachable(self) -> None:
        assert shortest_path(1, 5, _neighbors_from(CHAIN)) is None

    def test_beyond_depth(self) -> None:
        assert shortest_path(1, 4, _neighbors_from(CHAIN), max_depth=2) is None

    def test_exactly_at_depth(self) -> None:
        assert shortest_path(1, 4, _neighbors_from(CHAIN), max_depth=3) == [1, 2, 3, 4]

    def test_reverse_direction(self) -> None:
        assert shortest_path(4, 1, _neighbors_from(CHAIN)) == [4, 3, 2, 1]


class TestEdgeCases:
    def test_same_person(self) -> None:
        calls: list[int] = []

        def neighbors(pid: int) -> set[int]:
            calls.append(pid)
            return set()

        assert shortest_path(7, 7, neighbors) == [7]
        assert calls == []

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            shortest_path(1, 2, _neighbors_from(CHAIN), max_depth=0)

    def test_self_loop_ignored(self) -> None:
        adj = {1: {1, 2}, 2: {1, 2}}
        assert shortest_path(1, 2, _neighbors_from(adj)) == [1, 2]

    def test_cycle_terminates(self) -> None:
        adj = _adjacency([(1, 2), (2, 3), (3, 1)])
        assert shortest_path(1, 99, _neighbors_from(adj)) is None

    def test_ties_break_on_lowest_id(self) -> None:
        # Two equal-length routes: 1-2-9 and 1-5-9.
        adj = _adjacency([(1, 5), (1, 2), (5, 9), (2, 9)])
        assert shortest_path(1, 9, _neighbors_from(adj)) == [1, 2, 9]

    def test_lookup_failure_propagates(self) -> None:
        def neighbors(pid: int) -> set[int]:
            if pid == 2:
                raise LookupFailedError("boom", person_id=pid)
            return CHAIN.get(pid, set())

        with pytest.raises(LookupFailedError) as excinfo:
            shortest_path(1, 4, neighbors)
        assert excinfo.value.person_id == 2

    def test_depth_limit_skips_expansion_of_frontier_edge(self) -> None:
        expanded: list[int] = []

        def neighbors(pid: int) -> set[int]:
            expanded.append(pid)
            return CHAIN.get(pid, set())

        shortest_path(1, 4, neighbors, max_depth=1)
        assert expanded == [1]


class TestStats:
    def test_counters(self) -> None:
        stats = SearchStats()
        shortest_path(1, 4, _neighbors_from(CHAIN), stats=stats)
        assert stats.expanded == 3
        assert stats.discovered == 3
        assert stats.peak_frontier >= 1


class TestAgainstNetworkx:
    """Degree equals the true graph distance on random graphs."""

    @pytest.mark.parametrize("seed", range(5))
    def test_shortest_and_valid(self, seed: int) -> None:
        rng = random.Random(seed)
        g = nx.gnm_random_graph(30, 45, seed=seed)
        adj = {n: set(g.neighbors(n)) for n in g.nodes}
        neighbors = _neighbors_from(adj)

        pairs = rng.sample(list(itertools.permutations(g.nodes, 2)), 40)
        for source, target in pairs:
            path = shortest_path(source, target, neighbors, max_depth=6)
            try:
                distance = nx.shortest_path_length(g, source, target)
            except nx.NetworkXNoPath:
                distance = None

            if distance is None or distance > 6:
                assert path is None
                continue

            assert path is not None
            assert len(path) - 1 == distance
            assert path[0] == source
            assert path[-1] == target
            for a, b in hops(path):
                assert b in adj[a]
