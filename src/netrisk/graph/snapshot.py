"""Build networkx views over one GraphData snapshot.

Each analysis builds its own graph from the snapshot it was handed; nothing
here is cached or shared between calls.
"""

from __future__ import annotations

from collections import defaultdict

import networkx as nx

from netrisk.graph._constants import _BIDIRECTIONAL_TYPES, _MIN_EDGE_STRENGTH
from netrisk.models import GraphData, GraphEdge


def build_undirected_graph(data: GraphData) -> nx.MultiGraph:
    """Undirected multigraph for path search.

    Only edges whose endpoints are both loaded nodes are inserted.  Each edge
    carries its relationship type, strength and a ``weight`` of 1/strength.
    """
    G = nx.MultiGraph()
    for node in data.nodes:
        G.add_node(node.id, type=node.type.value, name=node.name)
    for edge in data.edges:
        if edge.source in G and edge.target in G:
            G.add_edge(
                edge.source,
                edge.target,
                type=edge.type,
                strength=edge.strength,
                weight=1.0 / max(edge.strength, _MIN_EDGE_STRENGTH),
            )
    return G


def build_propagation_graph(data: GraphData) -> nx.MultiDiGraph:
    """Directed multigraph for risk propagation.

    Forward edges are added from every loaded source.  Partnership, supply
    and investment edges are also added in reverse when their target is
    loaded.  Nodes outside the snapshot may appear as edge targets but never
    get outgoing edges, so they are reached but not expanded.
    """
    loaded = data.node_ids()
    G = nx.MultiDiGraph()
    for node in data.nodes:
        G.add_node(node.id, type=node.type.value, name=node.name, loaded=True)
    for edge in data.edges:
        if edge.source in loaded:
            G.add_edge(edge.source, edge.target, type=edge.type, strength=edge.strength)
        if edge.type in _BIDIRECTIONAL_TYPES and edge.target in loaded:
            G.add_edge(edge.target, edge.source, type=edge.type, strength=edge.strength)
    return G


def incident_edges(data: GraphData) -> dict[str, list[GraphEdge]]:
    """Map node id to every snapshot edge touching it (self-loops counted once)."""
    index: dict[str, list[GraphEdge]] = defaultdict(list)
    for edge in data.edges:
        index[edge.source].append(edge)
        if edge.target != edge.source:
            index[edge.target].append(edge)
    return index
