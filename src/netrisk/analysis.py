"""Relationship analysis service: loads a fresh snapshot per call."""

from __future__ import annotations

import logging
from typing import Any

from netrisk import defaults
from netrisk.errors import NotFoundError
from netrisk.graph import (
    analyze_risk_propagation,
    calculate_influence_scores,
    enterprise_neighbourhood,
    find_shortest_path,
    graph_stats,
)
from netrisk.models import (
    GraphData,
    GraphEdge,
    InfluenceScore,
    NodeType,
    PathResult,
    RiskPropagationResult,
)
from netrisk.ports import NetRiskStore

log = logging.getLogger("netrisk.analysis")


class RelationshipAnalyzer:
    """Graph operations bound to a store.

    Every call reads its own snapshot, so concurrent calls never share
    graph state.
    """

    def __init__(self, store: NetRiskStore, node_types: list[NodeType] | None = None) -> None:
        self._store = store
        self._node_types = node_types or [NodeType.ENTERPRISE]

    async def find_shortest_path(
        self,
        start_id: str,
        end_id: str,
        max_depth: float = defaults.DEFAULT_PATH_MAX_DEPTH,
    ) -> PathResult | None:
        data = await self._store.load_graph(self._node_types)
        return find_shortest_path(data, start_id, end_id, max_depth)

    async def calculate_influence_scores(
        self, node_ids: list[str] | None = None,
    ) -> list[InfluenceScore]:
        data = await self._store.load_graph(self._node_types)
        return calculate_influence_scores(data, node_ids)

    async def analyze_risk_propagation(
        self,
        source_id: str,
        initial_risk: float = defaults.DEFAULT_INITIAL_RISK,
        max_depth: int = defaults.DEFAULT_PROPAGATION_MAX_DEPTH,
    ) -> RiskPropagationResult:
        data = await self._store.load_graph(self._node_types)
        result = analyze_risk_propagation(data, source_id, initial_risk, max_depth)
        log.info(
            "Risk propagation from %s affected %d nodes",
            source_id, len(result.affected_nodes),
            extra={"enterprise_id": source_id},
        )
        return result

    async def neighbourhood(
        self, enterprise_id: str, depth: int = defaults.DEFAULT_NEIGHBOURHOOD_DEPTH,
    ) -> GraphData:
        """Enterprises within ``depth`` hops of ``enterprise_id`` and the edges among them."""
        if await self._store.get_entity(enterprise_id) is None:
            raise NotFoundError("enterprise", enterprise_id)
        data = await self._store.load_graph(self._node_types)
        return enterprise_neighbourhood(data, enterprise_id, depth)

    async def node_edges(self, node_id: str) -> list[GraphEdge]:
        if await self._store.get_entity(node_id) is None:
            raise NotFoundError("enterprise", node_id)
        return await self._store.get_incident_edges(node_id)

    async def graph_stats(self) -> dict[str, Any]:
        data = await self._store.load_graph(self._node_types)
        enterprises = await self._store.list_entities(defaults.QUERY_LIMIT_LARGE)
        return graph_stats(data, enterprises)
