"""SQLite implementation of NetRiskStore.

All SQL, schema management, and low-level persistence lives here.
Application code should depend on the ports, not on this module directly.
Port methods run the blocking sqlite calls on a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path
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


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_SCHEMA = """
CREATE TABLE IF NOT EXISTS enterprises (
    id                TEXT PRIMARY KEY,
    name              TEXT NOT NULL,
    status            TEXT NOT NULL DEFAULT 'active',
    data              TEXT NOT NULL,
    scores            TEXT,
    scores_updated_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_enterprises_name ON enterprises(name);

CREATE TABLE IF NOT EXISTS graph_nodes (
    id         TEXT PRIMARY KEY,
    type       TEXT NOT NULL,
    name       TEXT NOT NULL DEFAULT '',
    properties TEXT
);
CREATE INDEX IF NOT EXISTS idx_graph_nodes_type ON graph_nodes(type);

CREATE TABLE IF NOT EXISTS relationships (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    from_id    TEXT NOT NULL,
    to_id      TEXT NOT NULL,
    type       TEXT NOT NULL,
    strength   REAL NOT NULL,
    properties TEXT
);
CREATE INDEX IF NOT EXISTS idx_relationships_from ON relationships(from_id);
CREATE INDEX IF NOT EXISTS idx_relationships_to   ON relationships(to_id);

CREATE TABLE IF NOT EXISTS enterprise_relationships (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    enterprise_id TEXT NOT NULL,
    type          TEXT NOT NULL,
    strength      REAL NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_ent_rel_enterprise ON enterprise_relationships(enterprise_id);

CREATE TABLE IF NOT EXISTS risk_factors (
    id            TEXT PRIMARY KEY,
    enterprise_id TEXT NOT NULL,
    status        TEXT NOT NULL,
    identified_at TEXT NOT NULL,
    data          TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_risk_factors_enterprise ON risk_factors(enterprise_id);

CREATE TABLE IF NOT EXISTS financial_data (
    enterprise_id TEXT NOT NULL,
    year          INTEGER NOT NULL,
    quarter       INTEGER NOT NULL DEFAULT 0,
    data          TEXT NOT NULL,
    PRIMARY KEY (enterprise_id, year, quarter)
);

CREATE TABLE IF NOT EXISTS engagement_stats (
    enterprise_id TEXT PRIMARY KEY,
    data          TEXT NOT NULL,
    updated_at    TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS risk_warnings (
    id              TEXT PRIMARY KEY,
    enterprise_id   TEXT NOT NULL,
    enterprise_name TEXT NOT NULL DEFAULT '',
    warning_type    TEXT NOT NULL,
    severity        TEXT NOT NULL,
    message         TEXT NOT NULL,
    risk_factor_id  TEXT,
    created_at      TEXT NOT NULL,
    is_read         INTEGER NOT NULL DEFAULT 0,
    resolved_at     TEXT,
    resolved_by     TEXT
);
CREATE INDEX IF NOT EXISTS idx_warnings_enterprise ON risk_warnings(enterprise_id);
CREATE INDEX IF NOT EXISTS idx_warnings_created    ON risk_warnings(created_at);
"""


# ---------------------------------------------------------------------------
# SqliteStore
# ---------------------------------------------------------------------------

class SqliteStore:
    """NetRiskStore backed by a single SQLite file."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with sqlite3.connect(str(self._db_path)) as conn:
            conn.executescript(_SCHEMA)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        pass  # connections are per-call; nothing to tear down

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def ping(self) -> None:
        with self._connect() as conn:
            conn.execute("SELECT 1").fetchone()

    # ------------------------------------------------------------------
    # Seeding (synchronous)
    # ------------------------------------------------------------------

    def add_enterprise(self, enterprise: Enterprise) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO enterprises (id, name, status, data) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET name=excluded.name, "
                "status=excluded.status, data=excluded.data",
                (enterprise.id, enterprise.name, enterprise.status,
                 json.dumps(enterprise.to_dict())),
            )
            conn.execute(
                "INSERT INTO graph_nodes (id, type, name) VALUES (?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET type=excluded.type, name=excluded.name",
                (enterprise.id, NodeType.ENTERPRISE.value, enterprise.name),
            )

    def add_node(self, node: GraphNode) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO graph_nodes (id, type, name, properties) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET type=excluded.type, name=excluded.name, "
                "properties=excluded.properties",
                (node.id, node.type.value, node.name, _dumps_opt(node.properties)),
            )

    def add_edge(self, edge: GraphEdge) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO relationships (from_id, to_id, type, strength, properties) "
                "VALUES (?, ?, ?, ?, ?)",
                (edge.source, edge.target, edge.type, edge.strength,
                 _dumps_opt(edge.properties)),
            )

    def add_relationship(self, enterprise_id: str, rel: EnterpriseRelationship) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO enterprise_relationships (enterprise_id, type, strength) "
                "VALUES (?, ?, ?)",
                (enterprise_id, rel.type, rel.strength),
            )

    def add_risk_factor(self, factor: RiskFactor) -> None:
        d = factor.to_dict()
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO risk_factors (id, enterprise_id, status, identified_at, data) "
                "VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET status=excluded.status, "
                "identified_at=excluded.identified_at, data=excluded.data",
                (factor.id, factor.enterprise_id, d["status"], d["identified_at"],
                 json.dumps(d)),
            )

    def add_financial(self, enterprise_id: str, record: FinancialRecord) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO financial_data (enterprise_id, year, quarter, data) "
                "VALUES (?, ?, ?, ?) "
                "ON CONFLICT(enterprise_id, year, quarter) DO UPDATE SET data=excluded.data",
                (enterprise_id, record.year, record.quarter or 0,
                 json.dumps(record.to_dict())),
            )

    def set_engagement_stats(self, enterprise_id: str, stats: EngagementStats) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO engagement_stats (enterprise_id, data, updated_at) "
                "VALUES (?, ?, ?) "
                "ON CONFLICT(enterprise_id) DO UPDATE SET data=excluded.data, "
                "updated_at=excluded.updated_at",
                (enterprise_id, json.dumps(stats.to_dict()), now_iso()),
            )

    def get_scores(self, enterprise_id: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT scores, scores_updated_at FROM enterprises WHERE id = ?",
                (enterprise_id,),
            ).fetchone()
        if row is None or row["scores"] is None:
            return None
        return {**json.loads(row["scores"]), "updated_at": row["scores_updated_at"]}

    # ------------------------------------------------------------------
    # GraphDataPort
    # ------------------------------------------------------------------

    async def load_graph(self, node_types: list[NodeType] | None = None) -> GraphData:
        return await asyncio.to_thread(self._load_graph, node_types)

    def _load_graph(self, node_types: list[NodeType] | None) -> GraphData:
        # Enterprise nodes are only loaded while the enterprise is active.
        clauses = ["(g.type != 'enterprise' OR COALESCE(e.status, 'active') = 'active')"]
        params: list[Any] = []
        if node_types:
            marks = ", ".join("?" for _ in node_types)
            clauses.append(f"g.type IN ({marks})")
            params.extend(NodeType(t).value for t in node_types)
        where = " WHERE " + " AND ".join(clauses)
        with self._connect() as conn:
            node_rows = conn.execute(
                "SELECT g.* FROM graph_nodes g LEFT JOIN enterprises e ON e.id = g.id"
                f"{where} ORDER BY g.rowid",
                params,
            ).fetchall()
            edge_rows = conn.execute(
                "SELECT * FROM relationships WHERE strength > 0 ORDER BY id",
            ).fetchall()
        return GraphData(
            nodes=[_row_to_node(r) for r in node_rows],
            edges=[_row_to_edge(r) for r in edge_rows],
        )

    async def get_incident_edges(self, node_id: str) -> list[GraphEdge]:
        return await asyncio.to_thread(self._get_incident_edges, node_id)

    def _get_incident_edges(self, node_id: str) -> list[GraphEdge]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM relationships "
                "WHERE strength > 0 AND (from_id = ? OR to_id = ?) ORDER BY id",
                (node_id, node_id),
            ).fetchall()
        return [_row_to_edge(r) for r in rows]

    # ------------------------------------------------------------------
    # EntityStorePort
    # ------------------------------------------------------------------

    async def get_entity(self, enterprise_id: str) -> Enterprise | None:
        return await asyncio.to_thread(self._get_entity, enterprise_id)

    def _get_entity(self, enterprise_id: str) -> Enterprise | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT data FROM enterprises WHERE id = ?", (enterprise_id,),
            ).fetchone()
        if row is None:
            return None
        return Enterprise.from_dict(json.loads(row["data"]))

    async def get_active_risk_factors(self, enterprise_id: str) -> list[RiskFactor]:
        return await asyncio.to_thread(self._get_active_risk_factors, enterprise_id)

    def _get_active_risk_factors(self, enterprise_id: str) -> list[RiskFactor]:
        statuses = [s.value for s in ASSESSABLE_FACTOR_STATUSES]
        marks = ", ".join("?" for _ in statuses)
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT data FROM risk_factors WHERE enterprise_id = ? "
                f"AND status IN ({marks}) ORDER BY identified_at DESC",
                [enterprise_id, *statuses],
            ).fetchall()
        return [RiskFactor.from_dict(json.loads(r["data"])) for r in rows]

    async def get_relationships(self, enterprise_id: str) -> list[EnterpriseRelationship]:
        return await asyncio.to_thread(self._get_relationships, enterprise_id)

    def _get_relationships(self, enterprise_id: str) -> list[EnterpriseRelationship]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT type, strength FROM enterprise_relationships "
                "WHERE enterprise_id = ? ORDER BY id",
                (enterprise_id,),
            ).fetchall()
        return [EnterpriseRelationship(type=r["type"], strength=r["strength"]) for r in rows]

    async def get_latest_financials(
        self, enterprise_id: str, limit: int = 3,
    ) -> list[FinancialRecord]:
        return await asyncio.to_thread(self._get_latest_financials, enterprise_id, limit)

    def _get_latest_financials(self, enterprise_id: str, limit: int) -> list[FinancialRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT data FROM financial_data WHERE enterprise_id = ? "
                "ORDER BY year DESC, quarter DESC LIMIT ?",
                (enterprise_id, limit),
            ).fetchall()
        return [FinancialRecord.from_dict(json.loads(r["data"])) for r in rows]

    async def list_entities(self, limit: int = defaults.QUERY_LIMIT_MEDIUM) -> list[Enterprise]:
        return await asyncio.to_thread(self._list_entities, limit)

    def _list_entities(self, limit: int) -> list[Enterprise]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT data FROM enterprises ORDER BY name ASC LIMIT ?", (limit,),
            ).fetchall()
        return [Enterprise.from_dict(json.loads(r["data"])) for r in rows]

    async def update_risk_factor_status(self, factor_id: str, status: FactorStatus) -> bool:
        return await asyncio.to_thread(self._update_risk_factor_status, factor_id, status)

    def _update_risk_factor_status(self, factor_id: str, status: FactorStatus) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT data FROM risk_factors WHERE id = ?", (factor_id,),
            ).fetchone()
            if row is None:
                return False
            data = json.loads(row["data"])
            data["status"] = status.value
            conn.execute(
                "UPDATE risk_factors SET status = ?, data = ? WHERE id = ?",
                (status.value, json.dumps(data), factor_id),
            )
        return True

    async def save_scores(self, enterprise_id: str, metrics: ScoringMetrics) -> None:
        await asyncio.to_thread(self._save_scores, enterprise_id, metrics)

    def _save_scores(self, enterprise_id: str, metrics: ScoringMetrics) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE enterprises SET scores = ?, scores_updated_at = ? WHERE id = ?",
                (json.dumps(metrics.to_dict()), now_iso(), enterprise_id),
            )

    # ------------------------------------------------------------------
    # RiskWarningStorePort
    # ------------------------------------------------------------------

    async def create_warning(self, warning: RiskWarning) -> str:
        return await asyncio.to_thread(self._create_warning, warning)

    def _create_warning(self, warning: RiskWarning) -> str:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO risk_warnings (id, enterprise_id, enterprise_name, "
                "warning_type, severity, message, risk_factor_id, created_at, is_read, "
                "resolved_at, resolved_by) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    warning.id, warning.enterprise_id, warning.enterprise_name,
                    warning.warning_type.value, warning.severity.value, warning.message,
                    warning.risk_factor_id, warning.created_at, int(warning.is_read),
                    warning.resolved_at, warning.resolved_by,
                ),
            )
        return warning.id

    async def list_warnings(
        self,
        *,
        is_read: bool | None = None,
        severity: str | None = None,
        enterprise_id: str | None = None,
        limit: int | None = None,
    ) -> list[RiskWarning]:
        return await asyncio.to_thread(
            self._list_warnings, is_read, severity, enterprise_id, limit,
        )

    def _list_warnings(
        self,
        is_read: bool | None,
        severity: str | None,
        enterprise_id: str | None,
        limit: int | None,
    ) -> list[RiskWarning]:
        clauses: list[str] = []
        params: list[Any] = []
        if is_read is not None:
            clauses.append("is_read = ?")
            params.append(int(is_read))
        if severity:
            clauses.append("severity = ?")
            params.append(severity)
        if enterprise_id:
            clauses.append("enterprise_id = ?")
            params.append(enterprise_id)
        where = (" WHERE " + " AND ".join(clauses)) if clauses else ""
        sql = f"SELECT * FROM risk_warnings{where} ORDER BY created_at DESC, rowid DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_row_to_warning(r) for r in rows]

    async def mark_read(self, warning_id: str) -> bool:
        return await asyncio.to_thread(self._mark_read, warning_id)

    def _mark_read(self, warning_id: str) -> bool:
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE risk_warnings SET is_read = 1 WHERE id = ?", (warning_id,),
            )
        return cur.rowcount > 0

    async def resolve_warning(self, warning_id: str, resolved_by: str) -> bool:
        return await asyncio.to_thread(self._resolve_warning, warning_id, resolved_by)

    def _resolve_warning(self, warning_id: str, resolved_by: str) -> bool:
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE risk_warnings SET resolved_at = ?, resolved_by = ? WHERE id = ?",
                (now_iso(), resolved_by, warning_id),
            )
        return cur.rowcount > 0

    # ------------------------------------------------------------------
    # ScoringDataPort
    # ------------------------------------------------------------------

    async def get_engagement_stats(self, enterprise_id: str) -> EngagementStats:
        return await asyncio.to_thread(self._get_engagement_stats, enterprise_id)

    def _get_engagement_stats(self, enterprise_id: str) -> EngagementStats:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT data FROM engagement_stats WHERE enterprise_id = ?",
                (enterprise_id,),
            ).fetchone()
        if row is None:
            return EngagementStats()
        return EngagementStats.from_dict(json.loads(row["data"]))


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------

def _dumps_opt(value: dict[str, Any] | None) -> str | None:
    return json.dumps(value) if value is not None else None


def _loads_opt(value: str | None) -> dict[str, Any] | None:
    return json.loads(value) if value else None


def _row_to_node(r: sqlite3.Row) -> GraphNode:
    return GraphNode(
        id=r["id"],
        type=NodeType(r["type"]),
        name=r["name"],
        properties=_loads_opt(r["properties"]),
    )


def _row_to_edge(r: sqlite3.Row) -> GraphEdge:
    return GraphEdge(
        source=r["from_id"],
        target=r["to_id"],
        type=r["type"],
        strength=r["strength"],
        properties=_loads_opt(r["properties"]),
    )


def _row_to_warning(r: sqlite3.Row) -> RiskWarning:
    d = dict(r)
    d["is_read"] = bool(d["is_read"])
    return RiskWarning.from_dict(d)
