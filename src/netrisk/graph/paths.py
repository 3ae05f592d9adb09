"""Weighted shortest-path search bounded by a distance limit."""

from __future__ import annotations

import logging

import networkx as nx

from netrisk.defaults import DEFAULT_PATH_MAX_DEPTH
from netrisk.graph.snapshot import build_undirected_graph
from netrisk.models import GraphData, PathResult, PathStep

log = logging.getLogger("netrisk.graph")


def find_shortest_path(
    data: GraphData,
    start_id: str,
    end_id: str,
    max_depth: float = DEFAULT_PATH_MAX_DEPTH,
) -> PathResult | None:
    """Dijkstra over 1/strength weights, treating every edge as undirected.

    Returns ``None`` when an endpoint is not in the snapshot or the end
    cannot be reached within a total distance of ``max_depth``.
    """
    G = build_undirected_graph(data)
    if start_id not in G or end_id not in G:
        return None
    if start_id == end_id:
        return PathResult(path=[start_id], total_distance=0.0)

    try:
        distance, path = nx.single_source_dijkstra(
            G, start_id, end_id, cutoff=max_depth, weight="weight",
        )
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        log.debug("No path %s -> %s within %s", start_id, end_id, max_depth)
        return None

    steps: list[PathStep] = []
    for source, target in zip(path, path[1:]):
        # parallel edges: dijkstra followed the lightest one
        attrs = min(G.get_edge_data(source, target).values(), key=lambda a: a["weight"])
        steps.append(PathStep(
            source=source, target=target,
            relationship_type=attrs["type"], strength=attrs["strength"],
        ))
    return PathResult(path=path, total_distance=distance, steps=steps)
