"""Subgraph of everything within N hops of one node."""

from __future__ import annotations

import networkx as nx

from netrisk.defaults import DEFAULT_NEIGHBOURHOOD_DEPTH, MAX_NEIGHBOURHOOD_DEPTH
from netrisk.errors import NotFoundError, ValidationError
from netrisk.graph.snapshot import build_undirected_graph
from netrisk.models import GraphData


def enterprise_neighbourhood(
    data: GraphData,
    center_id: str,
    depth: int = DEFAULT_NEIGHBOURHOOD_DEPTH,
) -> GraphData:
    """Nodes at most ``depth`` hops from ``center_id`` and the edges among them.

    Hops ignore edge direction.  Nodes keep snapshot order, and every snapshot
    edge whose two ends are both kept is returned, parallel edges included.
    """
    if not 1 <= depth <= MAX_NEIGHBOURHOOD_DEPTH:
        raise ValidationError(f"depth must be between 1 and {MAX_NEIGHBOURHOOD_DEPTH}, got {depth}")
    G = build_undirected_graph(data)
    if center_id not in G:
        raise NotFoundError("node", center_id)

    kept = set(nx.ego_graph(G, center_id, radius=depth))
    return GraphData(
        nodes=[n for n in data.nodes if n.id in kept],
        edges=[e for e in data.edges if e.source in kept and e.target in kept],
    )
