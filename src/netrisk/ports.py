"""Storage port interfaces for netrisk.

Defines Protocol classes that any persistence backend must implement.
The composite ``NetRiskStore`` is what application code depends on.
All port methods are coroutines.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from netrisk import defaults
from netrisk.models import (
    EngagementStats,
    Enterprise,
    EnterpriseRelationship,
    FactorStatus,
    FinancialRecord,
    GraphData,
    GraphEdge,
    NodeType,
    RiskFactor,
    RiskWarning,
    ScoringMetrics,
)


# ---------------------------------------------------------------------------
# Individual ports
# ---------------------------------------------------------------------------

@runtime_checkable
class GraphDataPort(Protocol):
    async def load_graph(
        self, node_types: list[NodeType] | None = None,
    ) -> GraphData: ...
    async def get_incident_edges(self, node_id: str) -> list[GraphEdge]: ...


@runtime_checkable
class EntityStorePort(Protocol):
    async def get_entity(self, enterprise_id: str) -> Enterprise | None: ...
    async def get_active_risk_factors(self, enterprise_id: str) -> list[RiskFactor]: ...
    async def get_relationships(
        self, enterprise_id: str,
    ) -> list[EnterpriseRelationship]: ...
    async def get_latest_financials(
        self, enterprise_id: str, limit: int = 3,
    ) -> list[FinancialRecord]: ...
    async def list_entities(self, limit: int = defaults.QUERY_LIMIT_MEDIUM) -> list[Enterprise]: ...
    async def update_risk_factor_status(
        self, factor_id: str, status: FactorStatus,
    ) -> bool: ...
    async def save_scores(self, enterprise_id: str, metrics: ScoringMetrics) -> None: ...


@runtime_checkable
class RiskWarningStorePort(Protocol):
    async def create_warning(self, warning: RiskWarning) -> str: ...
    async def list_warnings(
        self,
        *,
        is_read: bool | None = None,
        severity: str | None = None,
        enterprise_id: str | None = None,
        limit: int | None = None,
    ) -> list[RiskWarning]: ...
    async def mark_read(self, warning_id: str) -> bool: ...
    async def resolve_warning(self, warning_id: str, resolved_by: str) -> bool: ...


@runtime_checkable
class ScoringDataPort(Protocol):
    async def get_engagement_stats(self, enterprise_id: str) -> EngagementStats: ...


# ---------------------------------------------------------------------------
# Composite port
# ---------------------------------------------------------------------------

@runtime_checkable
class NetRiskStore(
    GraphDataPort,
    EntityStorePort,
    RiskWarningStorePort,
    ScoringDataPort,
    Protocol,
):
    """Union of all storage ports.  A backend implements this."""

    def close(self) -> None: ...
