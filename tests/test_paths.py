"""Tests for the bounded shortest-path search."""

from __future__ import annotations

import pytest

from netrisk.graph import find_shortest_path
from netrisk.models import GraphData, GraphEdge, GraphNode


def _graph(edges, nodes=None) -> GraphData:
    if nodes is None:
        nodes = sorted({e[0] for e in edges} | {e[1] for e in edges})
    return GraphData(
        nodes=[GraphNode(id=n, name=n.upper()) for n in nodes],
        edges=[GraphEdge(*e) for e in edges],
    )


class TestShortestPath:
    def test_chain_distance_is_sum_of_inverse_strengths(self):
        data = _graph([("a", "b", "supply", 0.5), ("b", "c", "guarantee", 1.0)])
        result = find_shortest_path(data, "a", "c")
        assert result is not None
        assert result.path == ["a", "b", "c"]
        assert result.total_distance == pytest.approx(3.0)
        assert [(s.source, s.target) for s in result.steps] == [("a", "b"), ("b", "c")]
        assert [s.relationship_type for s in result.steps] == ["supply", "guarantee"]
        assert [s.strength for s in result.steps] == [0.5, 1.0]

    def test_strong_indirect_route_beats_weak_direct_edge(self):
        data = _graph([
            ("a", "c", "other", 0.2),
            ("a", "b", "supply", 1.0),
            ("b", "c", "supply", 1.0),
        ])
        result = find_shortest_path(data, "a", "c", max_depth=20)
        assert result.path == ["a", "b", "c"]
        assert result.total_distance == pytest.approx(2.0)

    def test_edges_are_traversed_in_both_directions(self):
        data = _graph([("b", "a", "investment", 1.0)])
        result = find_shortest_path(data, "a", "b")
        assert result.path == ["a", "b"]
        assert result.steps[0].source == "a"
        assert result.steps[0].target == "b"

    def test_parallel_edges_use_strongest(self):
        data = _graph([("a", "b", "supply", 0.2), ("a", "b", "investment", 0.8)])
        result = find_shortest_path(data, "a", "b")
        assert result.total_distance == pytest.approx(1.25)
        assert result.steps[0].relationship_type == "investment"

    def test_start_equals_end(self):
        data = _graph([("a", "b", "supply", 1.0)])
        result = find_shortest_path(data, "a", "a")
        assert result.path == ["a"]
        assert result.total_distance == 0
        assert result.steps == []

    def test_unknown_endpoint_returns_none(self):
        data = _graph([("a", "b", "supply", 1.0)])
        assert find_shortest_path(data, "a", "zz") is None
        assert find_shortest_path(data, "zz", "a") is None

    def test_disconnected_returns_none(self):
        data = _graph([("a", "b", "supply", 1.0), ("c", "d", "supply", 1.0)])
        assert find_shortest_path(data, "a", "d") is None

    def test_path_longer_than_max_depth_returns_none(self):
        data = _graph([("a", "b", "other", 0.1)])
        assert find_shortest_path(data, "a", "b") is None
        assert find_shortest_path(data, "a", "b", max_depth=11).path == ["a", "b"]

    def test_distance_equal_to_max_depth_is_reachable(self):
        data = _graph([("a", "b", "supply", 0.5), ("b", "c", "supply", 0.5)])
        assert find_shortest_path(data, "a", "c", max_depth=4).total_distance == pytest.approx(4.0)
        assert find_shortest_path(data, "a", "c", max_depth=3.9) is None

    def test_parallel_edge_recorded_in_path_steps(self):
        data = _graph([
            ("a", "b", "investment", 0.9),
            ("b", "a", "supply", 0.3),
            ("b", "c", "guarantee", 0.5),
        ])
        result = find_shortest_path(data, "a", "c")
        assert [(s.relationship_type, s.strength) for s in result.steps] == [
            ("investment", 0.9),
            ("guarantee", 0.5),
        ]

    def test_edges_to_nodes_outside_snapshot_are_ignored(self):
        data = _graph([("a", "x", "supply", 1.0), ("x", "b", "supply", 1.0)], nodes=["a", "b"])
        assert find_shortest_path(data, "a", "b") is None

    def test_to_dict_uses_from_and_to(self):
        data = _graph([("a", "b", "supply", 0.5)])
        d = find_shortest_path(data, "a", "b").to_dict()
        assert d["path"] == ["a", "b"]
        assert d["total_distance"] == pytest.approx(2.0)
        assert d["steps"] == [
            {"from": "a", "to": "b", "relationship_type": "supply", "strength": 0.5},
        ]
