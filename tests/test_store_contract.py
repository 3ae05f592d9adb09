"""Contract tests for NetRiskStore implementations.

Every storage backend must pass these tests.  The ``contract_store`` fixture
is parametrised so that adding a new backend only requires extending the
params list.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from netrisk.adapters.memory_store import MemoryStore
from netrisk.adapters.sqlite_store import SqliteStore
from netrisk.models import (
    EngagementStats,
    Enterprise,
    EnterpriseRelationship,
    FactorStatus,
    FinancialRecord,
    GraphEdge,
    GraphNode,
    NodeType,
    RiskFactor,
    RiskWarning,
    ScoringMetrics,
    Severity,
    WarningSeverity,
    WarningType,
)
from netrisk.ports import (
    EntityStorePort,
    GraphDataPort,
    NetRiskStore,
    RiskWarningStorePort,
    ScoringDataPort,
)


# ---------------------------------------------------------------------------
# Parametrised fixture: extend params for new backends
# ---------------------------------------------------------------------------

@pytest.fixture(params=["memory", "sqlite"])
def contract_store(request, tmp_path):
    if request.param == "memory":
        store = MemoryStore()
    else:
        store = SqliteStore(tmp_path / "contract.db")
    yield store
    store.close()


def _warning(wid, *, enterprise_id="e1", severity=WarningSeverity.INFO, created_at):
    return RiskWarning(
        id=wid,
        enterprise_id=enterprise_id,
        enterprise_name="Alpha",
        warning_type=WarningType.FINANCIAL_ANOMALY,
        severity=severity,
        message=f"warning {wid}",
        created_at=created_at,
    )


class TestProtocolConformance:
    def test_implements_all_ports(self, contract_store):
        assert isinstance(contract_store, GraphDataPort)
        assert isinstance(contract_store, EntityStorePort)
        assert isinstance(contract_store, RiskWarningStorePort)
        assert isinstance(contract_store, ScoringDataPort)
        assert isinstance(contract_store, NetRiskStore)


class TestGraphData:
    @pytest.mark.asyncio
    async def test_load_graph_filters_inactive_and_weak(self, contract_store):
        contract_store.add_enterprise(Enterprise(id="e1", name="Alpha"))
        contract_store.add_enterprise(Enterprise(id="e2", name="Beta", status="revoked"))
        contract_store.add_node(GraphNode(id="p1", type=NodeType.PERSON, name="Li"))
        contract_store.add_edge(GraphEdge("e1", "e2", "supply", 0.7))
        contract_store.add_edge(GraphEdge("e1", "p1", "employment", 0.0))

        data = await contract_store.load_graph()
        assert data.node_ids() == {"e1", "p1"}
        assert [(e.source, e.target, e.type, e.strength) for e in data.edges] == [
            ("e1", "e2", "supply", 0.7),
        ]

    @pytest.mark.asyncio
    async def test_load_graph_node_type_filter(self, contract_store):
        contract_store.add_enterprise(Enterprise(id="e1", name="Alpha"))
        contract_store.add_node(GraphNode(id="p1", type=NodeType.PERSON, name="Li"))
        contract_store.add_node(GraphNode(id="x1", type=NodeType.PRODUCT, name="Rebar"))

        data = await contract_store.load_graph([NodeType.ENTERPRISE])
        assert data.node_ids() == {"e1"}
        data = await contract_store.load_graph([NodeType.PERSON, NodeType.PRODUCT])
        assert data.node_ids() == {"p1", "x1"}

    @pytest.mark.asyncio
    async def test_enterprise_node_without_record_is_loaded(self, contract_store):
        contract_store.add_node(GraphNode(id="n1", type=NodeType.ENTERPRISE, name="Orphan"))
        data = await contract_store.load_graph([NodeType.ENTERPRISE])
        assert data.node_ids() == {"n1"}

    @pytest.mark.asyncio
    async def test_incident_edges_both_directions(self, contract_store):
        contract_store.add_edge(GraphEdge("a", "b", "supply", 0.5))
        contract_store.add_edge(GraphEdge("c", "a", "guarantee", 1.0))
        contract_store.add_edge(GraphEdge("b", "c", "supply", 1.0))
        contract_store.add_edge(GraphEdge("a", "d", "other", 0.0))

        edges = await contract_store.get_incident_edges("a")
        assert sorted((e.source, e.target) for e in edges) == [("a", "b"), ("c", "a")]

    @pytest.mark.asyncio
    async def test_edge_properties_round_trip(self, contract_store):
        contract_store.add_edge(GraphEdge("a", "b", "investment", 0.4, {"share": 0.3}))
        (edge,) = await contract_store.get_incident_edges("b")
        assert edge.properties == {"share": 0.3}


class TestEntities:
    @pytest.mark.asyncio
    async def test_get_entity(self, contract_store):
        contract_store.add_enterprise(Enterprise(
            id="e1", name="Alpha", industry="steel", registered_capital=1e7,
            establish_date=date(2015, 3, 9), supplier_count=4,
        ))
        ent = await contract_store.get_entity("e1")
        assert ent.name == "Alpha"
        assert ent.industry == "steel"
        assert ent.establish_date == date(2015, 3, 9)
        assert ent.supplier_count == 4
        assert await contract_store.get_entity("missing") is None

    @pytest.mark.asyncio
    async def test_list_entities_sorted_and_limited(self, contract_store):
        for eid, name in (("e1", "Gamma"), ("e2", "Alpha"), ("e3", "Beta")):
            contract_store.add_enterprise(Enterprise(id=eid, name=name))
        names = [e.name for e in await contract_store.list_entities()]
        assert names == ["Alpha", "Beta", "Gamma"]
        assert len(await contract_store.list_entities(2)) == 2

    @pytest.mark.asyncio
    async def test_active_risk_factors(self, contract_store):
        def factor(fid, day, status):
            return RiskFactor(
                id=fid, enterprise_id="e1", category="legal", severity=Severity.HIGH,
                identified_at=datetime(2026, 1, day, tzinfo=timezone.utc), status=status,
            )

        contract_store.add_risk_factor(factor("old", 1, FactorStatus.ACTIVE))
        contract_store.add_risk_factor(factor("new", 5, FactorStatus.MONITORING))
        contract_store.add_risk_factor(factor("done", 9, FactorStatus.RESOLVED))
        contract_store.add_risk_factor(RiskFactor(
            id="other", enterprise_id="e2", category="legal", severity=Severity.LOW,
        ))

        factors = await contract_store.get_active_risk_factors("e1")
        assert [f.id for f in factors] == ["new", "old"]
        assert factors[0].severity == Severity.HIGH

    @pytest.mark.asyncio
    async def test_update_risk_factor_status(self, contract_store):
        contract_store.add_risk_factor(RiskFactor(
            id="f1", enterprise_id="e1", category="legal", severity=Severity.HIGH,
        ))
        assert await contract_store.update_risk_factor_status("f1", FactorStatus.RESOLVED)
        assert await contract_store.get_active_risk_factors("e1") == []
        assert not await contract_store.update_risk_factor_status("zz", FactorStatus.RESOLVED)

    @pytest.mark.asyncio
    async def test_relationships(self, contract_store):
        contract_store.add_relationship("e1", EnterpriseRelationship("supplier", 0.5))
        contract_store.add_relationship("e1", EnterpriseRelationship("supplier", 0.5))
        contract_store.add_relationship("e2", EnterpriseRelationship("customer", 1.0))
        rels = await contract_store.get_relationships("e1")
        assert rels == [EnterpriseRelationship("supplier", 0.5)] * 2

    @pytest.mark.asyncio
    async def test_latest_financials(self, contract_store):
        contract_store.add_financial("e1", FinancialRecord(year=2023, revenue=1))
        contract_store.add_financial("e1", FinancialRecord(year=2025, quarter=1, revenue=3))
        contract_store.add_financial("e1", FinancialRecord(year=2025, quarter=3, revenue=4))
        contract_store.add_financial("e1", FinancialRecord(year=2024, quarter=4, revenue=2))

        records = await contract_store.get_latest_financials("e1")
        assert [r.revenue for r in records] == [4, 3, 2]
        assert len(await contract_store.get_latest_financials("e1", 1)) == 1
        assert await contract_store.get_latest_financials("e9") == []

    @pytest.mark.asyncio
    async def test_financial_debt_ratio_derived(self, contract_store):
        contract_store.add_financial("e1", FinancialRecord(
            year=2025, total_assets=200, total_liabilities=50,
        ))
        (record,) = await contract_store.get_latest_financials("e1")
        assert record.debt_ratio == pytest.approx(0.25)

    @pytest.mark.asyncio
    async def test_save_scores(self, contract_store):
        contract_store.add_enterprise(Enterprise(id="e1", name="Alpha"))
        assert contract_store.get_scores("e1") is None
        await contract_store.save_scores("e1", ScoringMetrics(svs=1, des=2, nis=3, pcs=4))
        saved = contract_store.get_scores("e1")
        assert (saved["svs"], saved["des"], saved["nis"], saved["pcs"]) == (1, 2, 3, 4)


class TestEngagement:
    @pytest.mark.asyncio
    async def test_default_and_stored(self, contract_store):
        assert await contract_store.get_engagement_stats("e1") == EngagementStats()
        stats = EngagementStats(client_count=3, news_sentiment=0.25)
        contract_store.set_engagement_stats("e1", stats)
        assert await contract_store.get_engagement_stats("e1") == stats


class TestWarnings:
    @pytest.mark.asyncio
    async def test_create_and_list_newest_first(self, contract_store):
        await contract_store.create_warning(_warning("w1", created_at="2026-01-01T00:00:00+00:00"))
        await contract_store.create_warning(_warning("w2", created_at="2026-01-03T00:00:00+00:00"))
        await contract_store.create_warning(_warning("w3", created_at="2026-01-02T00:00:00+00:00"))

        warnings = await contract_store.list_warnings()
        assert [w.id for w in warnings] == ["w2", "w3", "w1"]
        assert [w.id for w in await contract_store.list_warnings(limit=1)] == ["w2"]

    @pytest.mark.asyncio
    async def test_filters(self, contract_store):
        await contract_store.create_warning(_warning(
            "w1", severity=WarningSeverity.CRITICAL, created_at="2026-01-01T00:00:00+00:00",
        ))
        await contract_store.create_warning(_warning(
            "w2", enterprise_id="e2", created_at="2026-01-02T00:00:00+00:00",
        ))
        await contract_store.mark_read("w2")

        assert [w.id for w in await contract_store.list_warnings(severity="critical")] == ["w1"]
        assert [w.id for w in await contract_store.list_warnings(enterprise_id="e2")] == ["w2"]
        assert [w.id for w in await contract_store.list_warnings(is_read=False)] == ["w1"]
        assert [w.id for w in await contract_store.list_warnings(is_read=True)] == ["w2"]

    @pytest.mark.asyncio
    async def test_mark_read_and_resolve(self, contract_store):
        await contract_store.create_warning(_warning("w1", created_at="2026-01-01T00:00:00+00:00"))
        assert await contract_store.mark_read("w1")
        assert await contract_store.resolve_warning("w1", "analyst")
        (warning,) = await contract_store.list_warnings()
        assert warning.is_read is True
        assert warning.resolved_by == "analyst"
        assert warning.resolved_at is not None

    @pytest.mark.asyncio
    async def test_missing_warning(self, contract_store):
        assert not await contract_store.mark_read("nope")
        assert not await contract_store.resolve_warning("nope", "analyst")
