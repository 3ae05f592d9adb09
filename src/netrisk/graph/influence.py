"""Approximate centrality metrics for graph nodes.

These are cheap local heuristics, not exact Brandes / power-iteration
centralities:
  - betweenness: distinct neighbours * 0.1, capped at 1
  - closeness:   mean of normalised degree and average edge strength
  - eigenvector: sum of neighbour degrees * 0.1 over node count, capped at 1
  - radius:      3 - 0.1 * degree - average strength, floored at 1
"""

from __future__ import annotations

import math

from netrisk.graph._constants import (
    _BETWEENNESS_PER_NEIGHBOR,
    _EIGENVECTOR_PER_NEIGHBOR_EDGE,
    _RADIUS_BASE,
    _RADIUS_FLOOR,
    _RADIUS_PER_EDGE,
    _W_BETWEENNESS,
    _W_CLOSENESS,
    _W_DEGREE,
    _W_EIGENVECTOR,
    _W_WEIGHTED_DEGREE,
)
from netrisk.graph.snapshot import incident_edges
from netrisk.models import GraphData, GraphEdge, InfluenceScore, round_half_up


def calculate_influence_scores(
    data: GraphData,
    node_ids: list[str] | None = None,
) -> list[InfluenceScore]:
    """Score every snapshot node (or the requested subset), highest first."""
    wanted = set(node_ids) if node_ids is not None else None
    targets = [n.id for n in data.nodes if wanted is None or n.id in wanted]
    index = incident_edges(data)
    node_count = len(data.nodes)

    scores = [_node_influence(nid, index, node_count) for nid in targets]
    scores.sort(key=lambda s: s.centrality_score, reverse=True)
    return scores


def _other_end(edge: GraphEdge, node_id: str) -> str:
    return edge.target if edge.source == node_id else edge.source


def _node_influence(
    node_id: str,
    index: dict[str, list[GraphEdge]],
    node_count: int,
) -> InfluenceScore:
    edges = index.get(node_id, [])
    degree = len(edges)
    weighted = sum(e.strength for e in edges)
    neighbors = [_other_end(e, node_id) for e in edges]

    betweenness = min(len(set(neighbors)) * _BETWEENNESS_PER_NEIGHBOR, 1.0)

    if degree == 0:
        closeness = 0.0
        eigenvector = 0.0
        radius = math.inf
    else:
        avg_strength = weighted / degree
        closeness = (min(degree / node_count, 1.0) + avg_strength) / 2
        neighbor_weight = sum(
            len(index.get(n, [])) * _EIGENVECTOR_PER_NEIGHBOR_EDGE for n in neighbors
        )
        eigenvector = min(neighbor_weight / node_count, 1.0)
        radius = round_half_up(
            max(_RADIUS_FLOOR, _RADIUS_BASE - degree * _RADIUS_PER_EDGE - avg_strength),
            2,
        )

    centrality = (
        degree * _W_DEGREE
        + weighted * _W_WEIGHTED_DEGREE
        + betweenness * _W_BETWEENNESS
        + closeness * _W_CLOSENESS
        + eigenvector * _W_EIGENVECTOR
    )
    return InfluenceScore(
        node_id=node_id,
        degree=degree,
        weighted_degree=weighted,
        centrality_score=centrality,
        betweenness_centrality=betweenness,
        closeness_centrality=closeness,
        eigenvector_centrality=eigenvector,
        influence_radius=radius,
    )
