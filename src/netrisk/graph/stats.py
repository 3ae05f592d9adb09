"""Aggregate statistics over a graph snapshot and its enterprises."""

from __future__ import annotations

from collections import Counter
from typing import Any

import networkx as nx

from netrisk.graph.snapshot import build_undirected_graph
from netrisk.models import Enterprise, GraphData

_TOP_INDUSTRIES = 10


def graph_stats(data: GraphData, enterprises: list[Enterprise]) -> dict[str, Any]:
    """Node/edge counts, relationship-type mix, industries, risk levels, structure."""
    active = [e for e in enterprises if e.status == "active"]
    node_types = Counter(n.type.value for n in data.nodes)
    rel_types = Counter(e.type for e in data.edges)
    industries = Counter(e.industry for e in active if e.industry)
    risk_levels = Counter(e.risk_level for e in active)

    G = build_undirected_graph(data)
    if len(G) == 0:
        structure = {"components": 0, "density": 0.0, "isolated": 0}
    else:
        structure = {
            "components": nx.number_connected_components(G),
            "density": round(nx.density(nx.Graph(G)), 4),
            "isolated": nx.number_of_isolates(G),
        }

    return {
        "nodes": {
            **dict(node_types),
            "enterprise": len(active),
            "relationship": len(data.edges),
        },
        "relationship_types": [
            {"type": t, "count": c} for t, c in rel_types.most_common()
        ],
        "industries": [
            {"industry": i, "count": c} for i, c in industries.most_common(_TOP_INDUSTRIES)
        ],
        "risk_levels": [
            {"level": lvl, "count": c} for lvl, c in risk_levels.items()
        ],
        "structure": structure,
    }
