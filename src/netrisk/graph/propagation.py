"""Risk propagation simulation with relationship-type and distance decay."""

from __future__ import annotations

import logging
import math
from collections import deque

from netrisk.defaults import DEFAULT_INITIAL_RISK, DEFAULT_PROPAGATION_MAX_DEPTH
from netrisk.errors import NotFoundError
from netrisk.graph._constants import (
    _DEFAULT_PROPAGATION_MULTIPLIER,
    _DISTANCE_DECAY,
    _MIN_PROPAGATED_RISK,
    _PROPAGATION_MULTIPLIERS,
)
from netrisk.graph.snapshot import build_propagation_graph
from netrisk.models import AffectedNode, GraphData, RiskPropagationResult, round_half_up

log = logging.getLogger("netrisk.graph")


def risk_decay(relationship_type: str, strength: float, distance: int) -> float:
    """Fraction of risk carried across one edge reached at ``distance`` hops."""
    multiplier = _PROPAGATION_MULTIPLIERS.get(relationship_type, _DEFAULT_PROPAGATION_MULTIPLIER)
    return multiplier * math.sqrt(strength) * _DISTANCE_DECAY ** distance


def analyze_risk_propagation(
    data: GraphData,
    source_id: str,
    initial_risk: float = DEFAULT_INITIAL_RISK,
    max_depth: int = DEFAULT_PROPAGATION_MAX_DEPTH,
) -> RiskPropagationResult:
    """Spread ``initial_risk`` outward from ``source_id`` breadth-first.

    Each node is expanded at most once.  A node's recorded risk only ever
    increases; a neighbour is enqueued whenever it receives a larger value.
    Risk at or below 0.01 is dropped and nodes at ``max_depth`` hops are not
    expanded.
    """
    if source_id not in data.node_ids():
        raise NotFoundError("node", source_id)

    G = build_propagation_graph(data)
    risk: dict[str, float] = {source_id: initial_risk}
    paths: dict[str, list[str]] = {source_id: [source_id]}
    distance: dict[str, int] = {source_id: 0}
    visited: set[str] = set()
    queue: deque[tuple[str, float, list[str], int]] = deque(
        [(source_id, initial_risk, [source_id], 0)],
    )

    while queue:
        node, current, path, depth = queue.popleft()
        if node in visited or depth >= max_depth:
            continue
        visited.add(node)

        for _, neighbor, attrs in G.out_edges(node, data=True):
            if neighbor in visited:
                continue
            propagated = current * risk_decay(attrs["type"], attrs["strength"], depth + 1)
            if propagated <= _MIN_PROPAGATED_RISK:
                continue
            if propagated > risk.get(neighbor, 0.0):
                risk[neighbor] = propagated
                paths[neighbor] = [*path, neighbor]
                distance[neighbor] = depth + 1
                queue.append((neighbor, propagated, paths[neighbor], depth + 1))

    affected = [
        AffectedNode(
            node_id=nid,
            risk_level=round_half_up(value, 2),
            propagation_path=paths[nid],
            distance=distance[nid],
        )
        for nid, value in risk.items()
        if nid != source_id and value > _MIN_PROPAGATED_RISK
    ]
    affected.sort(key=lambda a: a.risk_level, reverse=True)
    total = round_half_up(sum(risk.values()), 2)
    log.debug(
        "Propagation from %s reached %d nodes (exposure %.2f)",
        source_id, len(affected), total,
    )
    return RiskPropagationResult(
        source_node=source_id,
        affected_nodes=affected,
        total_risk_exposure=total,
    )
