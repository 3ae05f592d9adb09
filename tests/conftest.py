"""Shared fixtures for netrisk tests."""

import logging
from datetime import date, datetime, timezone

import pytest

from netrisk.adapters.memory_store import MemoryStore
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
from netrisk.observability import reset_metrics


# ---------------------------------------------------------------------------
# Auto-use fixtures: cleanup global state between tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; put it back after every test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "netrisk.db"


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sqlite_store(db_path):
    store = SqliteStore(db_path)
    yield store
    store.close()


def _seed(store) -> None:
    """Small enterprise network shared by the service, API and CLI tests.

    e1 -supply 0.8-> e2 -guarantee 0.5-> e3, e1 -investment 0.9-> e4
    (inactive), and person p1 employed by e1.
    """
    store.add_enterprise(Enterprise(
        id="e1", name="Alpha Steel", industry="steel", risk_level="high",
        registered_capital=2e8, establish_date=date(2010, 5, 1),
        business_scope="steel products", supplier_count=30, customer_count=60,
        partner_count=12,
    ))
    store.add_enterprise(Enterprise(
        id="e2", name="Beta Metals", industry="steel", risk_level="medium",
    ))
    store.add_enterprise(Enterprise(
        id="e3", name="Gamma Finance", industry="finance", risk_level="low",
    ))
    store.add_enterprise(Enterprise(
        id="e4", name="Delta Trading", industry="trade", status="inactive",
    ))
    store.add_node(GraphNode(id="p1", type=NodeType.PERSON, name="Zhang Wei"))

    store.add_edge(GraphEdge("e1", "e2", "supply", 0.8))
    store.add_edge(GraphEdge("e2", "e3", "guarantee", 0.5))
    store.add_edge(GraphEdge("e1", "e4", "investment", 0.9))
    store.add_edge(GraphEdge("p1", "e1", "employment", 1.0))

    store.add_relationship("e1", EnterpriseRelationship("supplier", 0.8))
    store.add_relationship("e1", EnterpriseRelationship("guarantor", 0.5))

    store.add_risk_factor(RiskFactor(
        id="f1", enterprise_id="e1", category="financial", severity=Severity.CRITICAL,
        description="overdue bank loans",
        identified_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    ))
    store.add_risk_factor(RiskFactor(
        id="f2", enterprise_id="e1", category="legal", severity=Severity.MEDIUM,
        description="pending contract dispute",
        identified_at=datetime(2026, 2, 1, tzinfo=timezone.utc),
    ))

    store.add_financial("e1", FinancialRecord(
        year=2025, quarter=4, revenue=1000, net_profit=50,
        total_assets=2000, total_liabilities=1500,
        current_assets=600, current_liabilities=500, roe=0.12,
    ))
    store.set_engagement_stats("e1", EngagementStats(
        client_count=25, client_active_ratio=0.7, client_avg_value=2e5,
        recent_task_count=6, recent_event_count=3, total_tasks=10, completed_tasks=8,
        news_count=12, news_sentiment=0.8, prospect_total=10, prospect_converted=4,
    ))


@pytest.fixture
def seed_network():
    """Return the seeding function so tests can apply it to any store."""
    return _seed


@pytest.fixture
def seeded_store(memory_store):
    _seed(memory_store)
    return memory_store
