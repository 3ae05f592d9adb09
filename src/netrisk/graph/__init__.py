"""Relationship graph analysis over networkx snapshots.

Pure analyses over one ``GraphData`` snapshot:
  - shortest path:  Dijkstra on 1/strength weights, bounded by a max distance
  - neighbourhood:  the subgraph within N hops of a node
  - influence:      approximate degree/betweenness/closeness/eigenvector scores
  - propagation:    breadth-first risk spread with type and distance decay
"""

from netrisk.graph.influence import calculate_influence_scores
from netrisk.graph.neighbourhood import enterprise_neighbourhood
from netrisk.graph.paths import find_shortest_path
from netrisk.graph.propagation import analyze_risk_propagation, risk_decay
from netrisk.graph.snapshot import (
    build_propagation_graph,
    build_undirected_graph,
    incident_edges,
)
from netrisk.graph.stats import graph_stats

__all__ = [
    "analyze_risk_propagation",
    "build_propagation_graph",
    "build_undirected_graph",
    "calculate_influence_scores",
    "enterprise_neighbourhood",
    "find_shortest_path",
    "graph_stats",
    "incident_edges",
    "risk_decay",
]
