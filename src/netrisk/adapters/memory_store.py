"""In-memory implementation of NetRiskStore.

Dict-backed; used by the test suite, demos and ``NETRISK_DB_BACKEND=memory``.
Seeding helpers (``add_*``) are synchronous, port methods are coroutines.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from netrisk import defaults
from netrisk.models import (
    ASSESSABLE_FACTOR_STATUSES,
    EngagementStats,
    Enterprise,
    EnterpriseRelationship,
    FactorStatus,
    FinancialRecord,
    GraphData,
    GraphEdge,
    GraphNode,
    NodeType,
    RiskFactor,
    RiskWarning,
    ScoringMetrics,
    now_iso,
)


class MemoryStore:
    """NetRiskStore kept entirely in process memory."""

    def __init__(self) -> None:
        self._enterprises: dict[str, Enterprise] = {}
        self._nodes: dict[str, GraphNode] = {}
        self._edges: list[GraphEdge] = []
        self._relationships: dict[str, list[EnterpriseRelationship]] = {}
        self._factors: dict[str, RiskFactor] = {}
        self._financials: dict[str, list[FinancialRecord]] = {}
        self._engagement: dict[str, EngagementStats] = {}
        self._warnings: dict[str, RiskWarning] = {}
        self._scores: dict[str, dict[str, Any]] = {}

    def close(self) -> None:
        pass

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def add_enterprise(self, enterprise: Enterprise) -> None:
        self._enterprises[enterprise.id] = enterprise
        self._nodes[enterprise.id] = GraphNode(
            id=enterprise.id, type=NodeType.ENTERPRISE, name=enterprise.name,
        )

    def add_node(self, node: GraphNode) -> None:
        self._nodes[node.id] = node

    def add_edge(self, edge: GraphEdge) -> None:
        self._edges.append(edge)

    def add_relationship(self, enterprise_id: str, rel: EnterpriseRelationship) -> None:
        self._relationships.setdefault(enterprise_id, []).append(rel)

    def add_risk_factor(self, factor: RiskFactor) -> None:
        self._factors[factor.id] = factor

    def add_financial(self, enterprise_id: str, record: FinancialRecord) -> None:
        self._financials.setdefault(enterprise_id, []).append(record)

    def set_engagement_stats(self, enterprise_id: str, stats: EngagementStats) -> None:
        self._engagement[enterprise_id] = stats

    def get_scores(self, enterprise_id: str) -> dict[str, Any] | None:
        return self._scores.get(enterprise_id)

    # ------------------------------------------------------------------
    # GraphDataPort
    # ------------------------------------------------------------------

    async def load_graph(self, node_types: list[NodeType] | None = None) -> GraphData:
        wanted = set(node_types) if node_types else None
        nodes = [
            n for n in self._nodes.values()
            if (wanted is None or n.type in wanted) and self._is_loadable(n)
        ]
        edges = [e for e in self._edges if e.strength > 0]
        return GraphData(nodes=nodes, edges=edges)

    def _is_loadable(self, node: GraphNode) -> bool:
        if node.type != NodeType.ENTERPRISE:
            return True
        enterprise = self._enterprises.get(node.id)
        return enterprise is None or enterprise.status == "active"

    async def get_incident_edges(self, node_id: str) -> list[GraphEdge]:
        return [
            e for e in self._edges
            if e.strength > 0 and (e.source == node_id or e.target == node_id)
        ]

    # ------------------------------------------------------------------
    # EntityStorePort
    # ------------------------------------------------------------------

    async def get_entity(self, enterprise_id: str) -> Enterprise | None:
        return self._enterprises.get(enterprise_id)

    async def get_active_risk_factors(self, enterprise_id: str) -> list[RiskFactor]:
        factors = [
            f for f in self._factors.values()
            if f.enterprise_id == enterprise_id and f.status in ASSESSABLE_FACTOR_STATUSES
        ]
        return sorted(factors, key=lambda f: f.identified_at, reverse=True)

    async def get_relationships(self, enterprise_id: str) -> list[EnterpriseRelationship]:
        return list(self._relationships.get(enterprise_id, []))

    async def get_latest_financials(
        self, enterprise_id: str, limit: int = 3,
    ) -> list[FinancialRecord]:
        records = sorted(
            self._financials.get(enterprise_id, []),
            key=lambda r: (r.year, r.quarter or 0),
            reverse=True,
        )
        return records[:limit]

    async def list_entities(self, limit: int = defaults.QUERY_LIMIT_MEDIUM) -> list[Enterprise]:
        return sorted(self._enterprises.values(), key=lambda e: e.name)[:limit]

    async def update_risk_factor_status(self, factor_id: str, status: FactorStatus) -> bool:
        factor = self._factors.get(factor_id)
        if factor is None:
            return False
        self._factors[factor_id] = dataclasses.replace(factor, status=status)
        return True

    async def save_scores(self, enterprise_id: str, metrics: ScoringMetrics) -> None:
        self._scores[enterprise_id] = {**metrics.to_dict(), "updated_at": now_iso()}

    # ------------------------------------------------------------------
    # RiskWarningStorePort
    # ------------------------------------------------------------------

    async def create_warning(self, warning: RiskWarning) -> str:
        self._warnings[warning.id] = warning
        return warning.id

    async def list_warnings(
        self,
        *,
        is_read: bool | None = None,
        severity: str | None = None,
        enterprise_id: str | None = None,
        limit: int | None = None,
    ) -> list[RiskWarning]:
        items = [
            w for w in self._warnings.values()
            if (is_read is None or w.is_read == is_read)
            and (severity is None or w.severity.value == severity)
            and (enterprise_id is None or w.enterprise_id == enterprise_id)
        ]
        items.sort(key=lambda w: w.created_at, reverse=True)
        return items[:limit] if limit is not None else items

    async def mark_read(self, warning_id: str) -> bool:
        warning = self._warnings.get(warning_id)
        if warning is None:
            return False
        warning.is_read = True
        return True

    async def resolve_warning(self, warning_id: str, resolved_by: str) -> bool:
        warning = self._warnings.get(warning_id)
        if warning is None:
            return False
        warning.resolved_at = now_iso()
        warning.resolved_by = resolved_by
        return True

    # ------------------------------------------------------------------
    # ScoringDataPort
    # ------------------------------------------------------------------

    async def get_engagement_stats(self, enterprise_id: str) -> EngagementStats:
        return self._engagement.get(enterprise_id) or EngagementStats()
