"""Core data types for netrisk."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from netrisk.errors import PartialBatchFailure


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    return now_utc().isoformat()


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for positive inputs (``round()`` rounds half to even)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class NodeType(str, Enum):
    ENTERPRISE = "enterprise"
    PERSON = "person"
    PRODUCT = "product"


class RelationshipType(str, Enum):
    INVESTMENT = "investment"
    GUARANTEE = "guarantee"
    SUPPLY = "supply"
    RISK = "risk"
    EMPLOYMENT = "employment"
    PARTNERSHIP = "partnership"
    OWNERSHIP = "ownership"
    OTHER = "other"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FactorStatus(str, Enum):
    ACTIVE = "active"
    MONITORING = "monitoring"
    RESOLVED = "resolved"
    FALSE_POSITIVE = "false_positive"


ASSESSABLE_FACTOR_STATUSES = (FactorStatus.ACTIVE, FactorStatus.MONITORING)


class WarningType(str, Enum):
    NEW_RISK = "new_risk"
    RISK_ESCALATION = "risk_escalation"
    GUARANTEE_CHAIN = "guarantee_chain"
    FINANCIAL_ANOMALY = "financial_anomaly"


class WarningSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class IndicatorStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Graph snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphNode:
    id: str
    type: NodeType = NodeType.ENTERPRISE
    name: str = ""
    properties: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "properties": self.properties,
        }


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    type: str
    strength: float
    properties: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.type,
            "strength": self.strength,
            "properties": self.properties,
        }


@dataclass
class GraphData:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# ---------------------------------------------------------------------------
# Path finding
# ---------------------------------------------------------------------------

@dataclass
class PathStep:
    source: str
    target: str
    relationship_type: str
    strength: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "relationship_type": self.relationship_type,
            "strength": self.strength,
        }


@dataclass
class PathResult:
    path: list[str]
    total_distance: float
    steps: list[PathStep] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "total_distance": self.total_distance,
            "steps": [s.to_dict() for s in self.steps],
        }


# ---------------------------------------------------------------------------
# Influence
# ---------------------------------------------------------------------------

@dataclass
class InfluenceScore:
    node_id: str
    degree: int = 0
    weighted_degree: float = 0.0
    centrality_score: float = 0.0
    betweenness_centrality: float = 0.0
    closeness_centrality: float = 0.0
    eigenvector_centrality: float = 0.0
    influence_radius: float = math.inf  # inf for isolated nodes

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_id": self.node_id,
            "degree": self.degree,
            "weighted_degree": self.weighted_degree,
            "centrality_score": self.centrality_score,
            "betweenness_centrality": self.betweenness_centrality,
            "closeness_centrality": self.closeness_centrality,
            "eigenvector_centrality": self.eigenvector_centrality,
            "influence_radius": (
                None if math.isinf(self.influence_radius) else self.influence_radius
            ),
        }


# ---------------------------------------------------------------------------
# Risk propagation
# ---------------------------------------------------------------------------

@dataclass
class AffectedNode:
    node_id: str
    risk_level: float
    propagation_path: list[str] = field(default_factory=list)
    distance: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_id": self.node_id,
            "risk_level": self.risk_level,
            "propagation_path": self.propagation_path,
            "distance": self.distance,
        }


@dataclass
class RiskPropagationResult:
    source_node: str
    affected_nodes: list[AffectedNode] = field(default_factory=list)
    total_risk_exposure: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_node": self.source_node,
            "affected_nodes": [a.to_dict() for a in self.affected_nodes],
            "total_risk_exposure": self.total_risk_exposure,
        }


# ---------------------------------------------------------------------------
# Entity store DTOs
# ---------------------------------------------------------------------------

@dataclass
class Enterprise:
    id: str
    name: str
    industry: str | None = None
    status: str = "active"
    risk_level: str | None = None
    registered_capital: float | None = None
    establish_date: date | None = None
    business_scope: str | None = None
    supplier_count: int = 0
    customer_count: int = 0
    partner_count: int = 0

    def years_in_business(self, today: date | None = None) -> int | None:
        if self.establish_date is None:
            return None
        return (today or now_utc().date()).year - self.establish_date.year

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "industry": self.industry,
            "status": self.status,
            "risk_level": self.risk_level,
            "registered_capital": self.registered_capital,
            "establish_date": _iso(self.establish_date),
            "business_scope": self.business_scope,
            "supplier_count": self.supplier_count,
            "customer_count": self.customer_count,
            "partner_count": self.partner_count,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Enterprise:
        return cls(
            id=d["id"],
            name=d.get("name", ""),
            industry=d.get("industry"),
            status=d.get("status") or "active",
            risk_level=d.get("risk_level"),
            registered_capital=d.get("registered_capital"),
            establish_date=_parse_date(d.get("establish_date")),
            business_scope=d.get("business_scope"),
            supplier_count=d.get("supplier_count") or 0,
            customer_count=d.get("customer_count") or 0,
            partner_count=d.get("partner_count") or 0,
        )


@dataclass
class RiskFactor:
    id: str
    enterprise_id: str
    category: str
    severity: Severity
    type: str = ""
    score: float = 0.0
    description: str = ""
    identified_at: datetime = field(default_factory=now_utc)
    status: FactorStatus = FactorStatus.ACTIVE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "enterprise_id": self.enterprise_id,
            "category": self.category,
            "type": self.type,
            "severity": self.severity.value,
            "score": self.score,
            "description": self.description,
            "identified_at": _iso(self.identified_at),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> RiskFactor:
        return cls(
            id=d["id"],
            enterprise_id=d["enterprise_id"],
            category=d.get("category", ""),
            severity=Severity(d["severity"]),
            type=d.get("type") or "",
            score=d.get("score") or 0.0,
            description=d.get("description") or "",
            identified_at=_parse_datetime(d["identified_at"]) if d.get("identified_at") else now_utc(),
            status=FactorStatus(d.get("status", "active")),
        )


@dataclass(frozen=True)
class EnterpriseRelationship:
    type: str
    strength: float


@dataclass
class FinancialRecord:
    year: int
    quarter: int | None = None
    revenue: float = 0.0
    net_profit: float = 0.0
    total_assets: float = 0.0
    total_liabilities: float = 0.0
    current_assets: float = 0.0
    current_liabilities: float = 0.0
    roe: float | None = None
    roa: float | None = None
    debt_ratio: float | None = None  # 0-1, derived when absent

    def __post_init__(self) -> None:
        if self.debt_ratio is None and self.total_assets:
            self.debt_ratio = self.total_liabilities / self.total_assets

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "quarter": self.quarter,
            "revenue": self.revenue,
            "net_profit": self.net_profit,
            "total_assets": self.total_assets,
            "total_liabilities": self.total_liabilities,
            "current_assets": self.current_assets,
            "current_liabilities": self.current_liabilities,
            "roe": self.roe,
            "roa": self.roa,
            "debt_ratio": self.debt_ratio,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FinancialRecord:
        return cls(
            year=int(d["year"]),
            quarter=d.get("quarter"),
            revenue=d.get("revenue") or 0.0,
            net_profit=d.get("net_profit") or 0.0,
            total_assets=d.get("total_assets") or 0.0,
            total_liabilities=d.get("total_liabilities") or 0.0,
            current_assets=d.get("current_assets") or 0.0,
            current_liabilities=d.get("current_liabilities") or 0.0,
            roe=d.get("roe"),
            roa=d.get("roa"),
            debt_ratio=d.get("debt_ratio"),
        )


@dataclass
class EngagementStats:
    """Pre-aggregated activity counters consumed by the scoring engine."""

    client_count: int = 0
    client_active_ratio: float = 0.0
    client_avg_value: float = 0.0
    recent_task_count: int = 0       # last 3 months
    recent_event_count: int = 0      # last 3 months
    total_tasks: int = 0
    completed_tasks: int = 0
    news_count: int = 0              # last 6 months
    news_sentiment: float | None = None  # 0 negative, 0.5 neutral, 1 positive
    prospect_total: int = 0
    prospect_converted: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "client_count": self.client_count,
            "client_active_ratio": self.client_active_ratio,
            "client_avg_value": self.client_avg_value,
            "recent_task_count": self.recent_task_count,
            "recent_event_count": self.recent_event_count,
            "total_tasks": self.total_tasks,
            "completed_tasks": self.completed_tasks,
            "news_count": self.news_count,
            "news_sentiment": self.news_sentiment,
            "prospect_total": self.prospect_total,
            "prospect_converted": self.prospect_converted,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> EngagementStats:
        known = cls().to_dict().keys()
        return cls(**{k: v for k, v in d.items() if k in known})


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------

@dataclass
class RiskWarning:
    id: str
    enterprise_id: str
    warning_type: WarningType
    severity: WarningSeverity
    message: str
    enterprise_name: str = ""
    risk_factor_id: str | None = None
    created_at: str = field(default_factory=now_iso)
    is_read: bool = False
    resolved_at: str | None = None
    resolved_by: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "enterprise_id": self.enterprise_id,
            "enterprise_name": self.enterprise_name,
            "warning_type": self.warning_type.value,
            "severity": self.severity.value,
            "message": self.message,
            "risk_factor_id": self.risk_factor_id,
            "created_at": self.created_at,
            "is_read": self.is_read,
            "resolved_at": self.resolved_at,
            "resolved_by": self.resolved_by,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> RiskWarning:
        return cls(
            id=d["id"],
            enterprise_id=d["enterprise_id"],
            warning_type=WarningType(d["warning_type"]),
            severity=WarningSeverity(d["severity"]),
            message=d["message"],
            enterprise_name=d.get("enterprise_name") or "",
            risk_factor_id=d.get("risk_factor_id"),
            created_at=d.get("created_at") or now_iso(),
            is_read=bool(d.get("is_read", False)),
            resolved_at=d.get("resolved_at"),
            resolved_by=d.get("resolved_by"),
        )


# ---------------------------------------------------------------------------
# Risk assessment
# ---------------------------------------------------------------------------

@dataclass
class NetworkRisk:
    propagation_score: float = 0.0
    influenced_by_count: int = 0
    influencing_count: int = 0
    critical_paths: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "propagation_score": self.propagation_score,
            "influenced_by_count": self.influenced_by_count,
            "influencing_count": self.influencing_count,
            "critical_paths": self.critical_paths,
        }


@dataclass
class FinancialIndicator:
    name: str
    value: float
    threshold: float
    status: IndicatorStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "threshold": self.threshold,
            "status": self.status.value,
        }


@dataclass
class FinancialRisk:
    score: float = 0.0
    indicators: list[FinancialIndicator] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "indicators": [i.to_dict() for i in self.indicators],
        }


@dataclass(frozen=True)
class RiskAssessment:
    enterprise_id: str
    enterprise_name: str
    overall_risk_level: RiskLevel
    overall_risk_score: int
    risk_factors: tuple[RiskFactor, ...]
    network_risk: NetworkRisk
    financial_risk: FinancialRisk
    assessment_date: datetime
    valid_until: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "enterprise_id": self.enterprise_id,
            "enterprise_name": self.enterprise_name,
            "overall_risk_level": self.overall_risk_level.value,
            "overall_risk_score": self.overall_risk_score,
            "risk_factors": [f.to_dict() for f in self.risk_factors],
            "network_risk": self.network_risk.to_dict(),
            "financial_risk": self.financial_risk.to_dict(),
            "assessment_date": _iso(self.assessment_date),
            "valid_until": _iso(self.valid_until),
        }


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringMetrics:
    svs: float = 0.0  # supplier value score
    des: float = 0.0  # demand engagement score
    nis: float = 0.0  # network influence score
    pcs: float = 0.0  # prospect conversion score

    def to_dict(self) -> dict[str, Any]:
        return {"svs": self.svs, "des": self.des, "nis": self.nis, "pcs": self.pcs}


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

@dataclass
class BatchResult:
    results: dict[str, Any] = field(default_factory=dict)
    failures: dict[str, PartialBatchFailure] = field(default_factory=dict)

    @property
    def total_requested(self) -> int:
        return len(self.results) + len(self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_requested": self.total_requested,
            "total_completed": len(self.results),
            "results": {
                k: v.to_dict() if hasattr(v, "to_dict") else v
                for k, v in self.results.items()
            },
            "failures": {k: str(f.cause) for k, f in self.failures.items()},
        }
