"""Tests for the approximate influence metrics."""

from __future__ import annotations

import math

import pytest

from netrisk.graph import calculate_influence_scores
from netrisk.models import GraphData, GraphEdge, GraphNode


@pytest.fixture
def star() -> GraphData:
    """Hub h linked to a (1.0), b (0.5), c (0.5); i is isolated."""
    return GraphData(
        nodes=[GraphNode(id=n) for n in ("h", "a", "b", "c", "i")],
        edges=[
            GraphEdge("h", "a", "investment", 1.0),
            GraphEdge("h", "b", "supply", 0.5),
            GraphEdge("c", "h", "supply", 0.5),
        ],
    )


class TestInfluenceScores:
    def test_hub_metrics(self, star):
        scores = {s.node_id: s for s in calculate_influence_scores(star)}
        hub = scores["h"]
        assert hub.degree == 3
        assert hub.weighted_degree == pytest.approx(2.0)
        assert hub.betweenness_centrality == pytest.approx(0.3)
        # (min(3/5, 1) + 2/3) / 2
        assert hub.closeness_centrality == pytest.approx((0.6 + 2 / 3) / 2)
        # neighbours each have one edge: 3 * 0.1 / 5
        assert hub.eigenvector_centrality == pytest.approx(0.06)
        # 3 - 0.3 - 2/3 = 2.0333 -> 2.03
        assert hub.influence_radius == pytest.approx(2.03)
        expected = (
            3 * 0.3 + 2.0 * 0.2 + 0.3 * 0.2
            + ((0.6 + 2 / 3) / 2) * 0.15 + 0.06 * 0.15
        )
        assert hub.centrality_score == pytest.approx(expected)

    def test_leaf_metrics(self, star):
        scores = {s.node_id: s for s in calculate_influence_scores(star)}
        leaf = scores["a"]
        assert leaf.degree == 1
        assert leaf.betweenness_centrality == pytest.approx(0.1)
        assert leaf.closeness_centrality == pytest.approx((0.2 + 1.0) / 2)
        # its single neighbour (the hub) has three edges
        assert leaf.eigenvector_centrality == pytest.approx(0.3 / 5)
        assert leaf.influence_radius == pytest.approx(1.9)

    def test_isolated_node(self, star):
        scores = {s.node_id: s for s in calculate_influence_scores(star)}
        lone = scores["i"]
        assert lone.degree == 0
        assert lone.centrality_score == 0
        assert lone.closeness_centrality == 0
        assert lone.eigenvector_centrality == 0
        assert math.isinf(lone.influence_radius)
        assert lone.to_dict()["influence_radius"] is None

    def test_sorted_by_centrality_descending(self, star):
        scores = calculate_influence_scores(star)
        assert scores[0].node_id == "h"
        assert scores[-1].node_id == "i"
        values = [s.centrality_score for s in scores]
        assert values == sorted(values, reverse=True)

    def test_subset_is_scored_against_full_graph(self, star):
        scores = calculate_influence_scores(star, ["a", "missing"])
        assert [s.node_id for s in scores] == ["a"]
        assert scores[0].eigenvector_centrality == pytest.approx(0.06)

    def test_radius_floor(self):
        edges = [GraphEdge("h", f"n{i}", "supply", 1.0) for i in range(25)]
        nodes = [GraphNode(id="h")] + [GraphNode(id=f"n{i}") for i in range(25)]
        scores = calculate_influence_scores(GraphData(nodes=nodes, edges=edges), ["h"])
        assert scores[0].influence_radius == 1.0
        assert scores[0].betweenness_centrality == 1.0

    def test_empty_graph(self):
        assert calculate_influence_scores(GraphData()) == []
