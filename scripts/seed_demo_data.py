#!/usr/bin/env python3
"""Seed a netrisk database with a realistic demo enterprise network.

Usage:
    PYTHONPATH=src python3 scripts/seed_demo_data.py [--db-path .netrisk/state.db]

Inserts enterprises, graph relationships, risk factors, financial records
and engagement counters through the SqliteStore seeding helpers.
"""

from __future__ import annotations

import argparse
from datetime import date, datetime, timedelta, timezone

from netrisk.adapters.sqlite_store import SqliteStore
from netrisk.models import (
    EngagementStats,
    Enterprise,
    EnterpriseRelationship,
    FinancialRecord,
    GraphEdge,
    GraphNode,
    NodeType,
    RiskFactor,
    Severity,
)


def _days_ago(days: float) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


# ---------------------------------------------------------------------------
# Enterprises
# ---------------------------------------------------------------------------

ENTERPRISES: list[dict] = [
    dict(id="ent-001", name="华东钢铁集团",     industry="steel",     risk="high",   capital=8e8, founded=2001, sup=60, cus=140, par=22),
    dict(id="ent-002", name="Jinyuan Metals",   industry="steel",     risk="medium", capital=1.2e8, founded=2012, sup=25, cus=40, par=8),
    dict(id="ent-003", name="Harbor Logistics", industry="logistics", risk="low",    capital=3e7, founded=2016, sup=8,  cus=70, par=12),
    dict(id="ent-004", name="Pacific Credit",   industry="finance",   risk="low",    capital=5e8, founded=2008, sup=2,  cus=300, par=30),
    dict(id="ent-005", name="Riverbend Parts",  industry="machinery", risk="medium", capital=6e6, founded=2019, sup=15, cus=12, par=3),
    dict(id="ent-006", name="Nova Textiles",    industry="textile",   risk="high",   capital=2e6, founded=2021, sup=4,  cus=6,  par=1),
    dict(id="ent-007", name="Old Mill Trading", industry="trade",     risk=None,     capital=1e6, founded=1998, sup=0,  cus=0,  par=0, status="deregistered"),
]

PEOPLE = [("per-001", "Chen Jie"), ("per-002", "Maria Ortiz")]

EDGES = [
    ("ent-002", "ent-001", "supply",      0.9),
    ("ent-005", "ent-001", "supply",      0.6),
    ("ent-001", "ent-003", "partnership", 0.7),
    ("ent-004", "ent-001", "investment",  0.4),
    ("ent-004", "ent-002", "guarantee",   0.8),
    ("ent-002", "ent-005", "guarantee",   0.5),
    ("ent-005", "ent-006", "supply",      0.3),
    ("ent-006", "ent-007", "ownership",   0.9),
    ("per-001", "ent-001", "employment",  1.0),
    ("per-002", "ent-004", "employment",  1.0),
]

RELATIONSHIPS = {
    "ent-001": [("supplier", 0.9), ("supplier", 0.6), ("investor", 0.4), ("partner", 0.7)],
    "ent-002": [("customer", 0.9), ("guarantor", 0.8), ("supplier", 0.5)],
    "ent-005": [("guarantor", 0.5), ("customer", 0.6)],
    "ent-006": [("subsidiary", 0.9)],
}

FACTORS = [
    dict(id="rf-001", ent="ent-001", category="financial",  severity=Severity.HIGH,     days=20, desc="Short-term debt rolled over twice"),
    dict(id="rf-002", ent="ent-001", category="legal",      severity=Severity.MEDIUM,   days=45, desc="Environmental compliance review"),
    dict(id="rf-003", ent="ent-006", category="financial",  severity=Severity.CRITICAL, days=3,  desc="Missed supplier payments"),
    dict(id="rf-004", ent="ent-006", category="operational", severity=Severity.HIGH,    days=10, desc="Key production line idle"),
    dict(id="rf-005", ent="ent-005", category="market",     severity=Severity.LOW,      days=60, desc="Demand softening in export markets"),
]

FINANCIALS = {
    "ent-001": [(2025, 3, 9.2e9, 1.8e8, 2.1e10, 1.62e10, 6.0e9, 5.4e9, 0.06)],
    "ent-002": [(2025, 3, 1.1e9, 6.0e7, 9.0e8, 4.1e8, 3.2e8, 2.0e8, 0.12)],
    "ent-006": [(2025, 2, 4.0e7, -6.0e6, 5.0e7, 4.4e7, 9.0e6, 1.2e7, -0.4)],
}


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------

def _seed_enterprises(store: SqliteStore) -> None:
    for e in ENTERPRISES:
        store.add_enterprise(Enterprise(
            id=e["id"],
            name=e["name"],
            industry=e["industry"],
            status=e.get("status", "active"),
            risk_level=e["risk"],
            registered_capital=e["capital"],
            establish_date=date(e["founded"], 1, 1),
            business_scope=f"{e['industry']} products and related services",
            supplier_count=e["sup"],
            customer_count=e["cus"],
            partner_count=e["par"],
        ))
    for pid, name in PEOPLE:
        store.add_node(GraphNode(id=pid, type=NodeType.PERSON, name=name))


def _seed_graph(store: SqliteStore) -> None:
    for source, target, rel_type, strength in EDGES:
        store.add_edge(GraphEdge(source, target, rel_type, strength))
    for ent_id, rels in RELATIONSHIPS.items():
        for rel_type, strength in rels:
            store.add_relationship(ent_id, EnterpriseRelationship(rel_type, strength))


def _seed_risk(store: SqliteStore) -> None:
    for f in FACTORS:
        store.add_risk_factor(RiskFactor(
            id=f["id"],
            enterprise_id=f["ent"],
            category=f["category"],
            severity=f["severity"],
            description=f["desc"],
            identified_at=_days_ago(f["days"]),
        ))
    for ent_id, rows in FINANCIALS.items():
        for year, quarter, rev, profit, assets, liab, cur_a, cur_l, roe in rows:
            store.add_financial(ent_id, FinancialRecord(
                year=year, quarter=quarter, revenue=rev, net_profit=profit,
                total_assets=assets, total_liabilities=liab,
                current_assets=cur_a, current_liabilities=cur_l, roe=roe,
            ))


def _seed_engagement(store: SqliteStore) -> None:
    store.set_engagement_stats("ent-001", EngagementStats(
        client_count=42, client_active_ratio=0.83, client_avg_value=1.4e6,
        recent_task_count=14, recent_event_count=6, total_tasks=40, completed_tasks=33,
        news_count=18, news_sentiment=0.45, prospect_total=12, prospect_converted=7,
    ))
    store.set_engagement_stats("ent-003", EngagementStats(
        client_count=9, client_active_ratio=0.55, client_avg_value=2.2e5,
        recent_task_count=3, recent_event_count=1, total_tasks=6, completed_tasks=5,
        news_count=2, news_sentiment=0.7,
    ))


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(description="Seed netrisk demo data")
    parser.add_argument(
        "--db-path",
        default=".netrisk/state.db",
        help="Path to SQLite database (default: .netrisk/state.db)",
    )
    args = parser.parse_args()

    store = SqliteStore(args.db_path)

    print(f"Seeding database: {args.db_path}")
    _seed_enterprises(store)
    print(f"  {len(ENTERPRISES)} enterprises and {len(PEOPLE)} people inserted")
    _seed_graph(store)
    print(f"  {len(EDGES)} graph relationships inserted")
    _seed_risk(store)
    print(f"  {len(FACTORS)} risk factors and financial records inserted")
    _seed_engagement(store)
    print("  engagement counters inserted")

    store.close()
    print("Done.")


if __name__ == "__main__":
    main()
