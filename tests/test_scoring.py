"""Tests for the SVS / DES / NIS / PCS scoring engine."""

from __future__ import annotations

from datetime import date

import pytest

from netrisk.errors import NotFoundError, ValidationError
from netrisk.models import EngagementStats, Enterprise, FinancialRecord, GraphEdge
from netrisk.scoring import ScoringEngine
from netrisk.scoring import subscores as sub

TODAY = date(2026, 1, 1)


class TestSupplierValueComponents:
    def test_financial_health_strong(self):
        ent = Enterprise(id="e", name="E", registered_capital=2e8)
        record = FinancialRecord(year=2025, net_profit=10, roe=0.2, debt_ratio=0.3)
        assert sub.financial_health(ent, record) == 100

    def test_roe_threshold_is_strict(self):
        ent = Enterprise(id="e", name="E")
        assert sub.financial_health(ent, FinancialRecord(year=2025, roe=0.15)) == 60
        assert sub.financial_health(ent, FinancialRecord(year=2025, roe=0.08)) == 50

    def test_debt_ratio_tiers(self):
        ent = Enterprise(id="e", name="E")
        assert sub.financial_health(ent, FinancialRecord(year=2025, debt_ratio=0.4)) == 55
        assert sub.financial_health(ent, FinancialRecord(year=2025, debt_ratio=0.7)) == 50
        assert sub.financial_health(ent, FinancialRecord(year=2025, debt_ratio=0.9)) == 35

    def test_financial_health_floor(self):
        ent = Enterprise(id="e", name="E")
        record = FinancialRecord(year=2025, net_profit=-1, roe=-0.05, debt_ratio=0.9)
        assert sub.financial_health(ent, record) == 0

    def test_financial_health_without_record(self):
        assert sub.financial_health(Enterprise(id="e", name="E"), None) == 50

    def test_company_scale(self):
        ent = Enterprise(
            id="e", name="E", registered_capital=5e8, establish_date=date(2010, 6, 1),
            supplier_count=30, customer_count=60, partner_count=12,
        )
        assert sub.company_scale(ent, TODAY) == 100
        assert sub.company_scale(Enterprise(id="e", name="E"), TODAY) == 40

    @pytest.mark.parametrize("level,expected", [
        ("low", 90), ("medium", 60), ("high", 30), ("critical", 50), (None, 50),
    ])
    def test_risk_level_score(self, level, expected):
        assert sub.risk_level_score(level) == expected

    def test_network_connectivity(self):
        ent = Enterprise(id="e", name="E", supplier_count=50, customer_count=10, partner_count=4)
        assert sub.network_connectivity(ent) == 20 + 25 + 10


class TestDemandEngagementComponents:
    def test_client_quality(self):
        assert sub.client_quality(EngagementStats()) == 20
        stats = EngagementStats(client_count=25, client_active_ratio=0.7, client_avg_value=2e5)
        assert sub.client_quality(stats) == 20 + 20 + 15 + 10

    def test_interaction_frequency(self):
        stats = EngagementStats(recent_task_count=20, recent_event_count=1)
        assert sub.interaction_frequency(stats) == 70

    def test_cooperation_depth(self):
        assert sub.cooperation_depth([]) == 40
        edges = [GraphEdge("e", "x", "supply", 1.0), GraphEdge("y", "e", "supply", 0.5)]
        assert sub.cooperation_depth(edges) == pytest.approx(60)
        many = [GraphEdge("e", f"x{i}", "supply", 1.0) for i in range(20)]
        assert sub.cooperation_depth(many) == 100

    def test_market_activity(self):
        assert sub.market_activity(EngagementStats()) == pytest.approx(47.5)
        assert sub.market_activity(EngagementStats(news_count=20, news_sentiment=1.0)) == 100
        assert sub.market_activity(EngagementStats(news_count=20, news_sentiment=0.0)) == 65


class TestNetworkInfluenceComponents:
    def test_supply_chain_counts_supply_and_partnership(self):
        edges = [
            GraphEdge("e", "a", "supply", 1.0),
            GraphEdge("e", "b", "supply", 1.0),
            GraphEdge("c", "e", "partnership", 1.0),
            GraphEdge("e", "d", "guarantee", 1.0),
        ]
        assert sub.supply_chain_influence(edges) == 26

    def test_investment_influence(self):
        edges = [GraphEdge("e", "a", "investment", 0.6), GraphEdge("e", "b", "investment", 1.0)]
        assert sub.investment_influence(edges) == pytest.approx(10 + 30 + 40)
        assert sub.investment_influence([]) == pytest.approx(35)

    def test_guarantee_and_industry(self):
        edges = [GraphEdge("e", str(i), "guarantee", 1.0) for i in range(3)]
        assert sub.guarantee_influence(edges) == 30
        assert sub.industry_connectivity(5) == 45
        assert sub.industry_connectivity(100) == 100


class TestProspectConversionComponents:
    def test_conversion_history(self):
        assert sub.conversion_history(EngagementStats()) == 40
        stats = EngagementStats(prospect_total=10, prospect_converted=5)
        assert sub.conversion_history(stats) == pytest.approx(60)

    def test_communication_quality(self):
        assert sub.communication_quality(EngagementStats()) == 50
        stats = EngagementStats(total_tasks=4, completed_tasks=4)
        assert sub.communication_quality(stats) == 100

    @pytest.mark.parametrize("length,expected", [(201, 100), (200, 90), (51, 80), (50, 70)])
    def test_demand_match(self, length, expected):
        ent = Enterprise(id="e", name="E", industry="steel", business_scope="x" * length)
        assert sub.demand_match(ent) == expected

    def test_decision_capability(self):
        ent = Enterprise(id="e", name="E", registered_capital=1e6, establish_date=date(2024, 1, 1))
        assert sub.decision_capability(ent, TODAY) == 60


_WILD_STATS = [
    EngagementStats(news_count=100, news_sentiment=5.0),
    EngagementStats(news_sentiment=-5.0),
    EngagementStats(prospect_total=10, prospect_converted=50),
    EngagementStats(prospect_total=10, prospect_converted=-50),
    EngagementStats(total_tasks=4, completed_tasks=40),
    EngagementStats(
        client_count=10**6, client_active_ratio=3.0, client_avg_value=1e12,
        recent_task_count=10**6, recent_event_count=10**6,
    ),
]
_STATS_COMPONENTS = [
    sub.client_quality,
    sub.interaction_frequency,
    sub.market_activity,
    sub.conversion_history,
    sub.communication_quality,
]


class TestComponentBounds:
    @pytest.mark.parametrize("stats", _WILD_STATS)
    @pytest.mark.parametrize("component", _STATS_COMPONENTS, ids=lambda f: f.__name__)
    def test_engagement_components(self, component, stats):
        assert 0 <= component(stats) <= 100

    @pytest.mark.parametrize("record", [
        FinancialRecord(year=2025, net_profit=-1e9, roe=-5.0, debt_ratio=50.0),
        FinancialRecord(year=2025, net_profit=1e12, roe=9.0, debt_ratio=-1.0),
    ])
    def test_financial_health(self, record):
        for capital in (-1e9, 1e15):
            ent = Enterprise(id="e", name="E", registered_capital=capital)
            assert 0 <= sub.financial_health(ent, record) <= 100

    def test_enterprise_components(self):
        huge = Enterprise(
            id="e", name="E", industry="steel", registered_capital=1e15,
            establish_date=date(1900, 1, 1), business_scope="x" * 10_000,
            supplier_count=10**6, customer_count=10**6, partner_count=10**6,
        )
        future = Enterprise(id="e", name="E", registered_capital=-1.0, establish_date=date(2099, 1, 1))
        for ent in (huge, future):
            for score in (
                sub.company_scale(ent, TODAY),
                sub.network_connectivity(ent),
                sub.demand_match(ent),
                sub.decision_capability(ent, TODAY),
            ):
                assert 0 <= score <= 100

    @pytest.mark.parametrize("strength", [-3.0, 5.0])
    def test_edge_components(self, strength):
        edges = [
            GraphEdge("e", f"t{i}", kind, strength)
            for i in range(200)
            for kind in ("supply", "investment", "guarantee")
        ]
        assert 0 <= sub.cooperation_depth(edges) <= 100
        assert 0 <= sub.supply_chain_influence(edges) <= 100
        assert 0 <= sub.investment_influence(edges) <= 100
        assert 0 <= sub.guarantee_influence(edges) <= 100
        assert 0 <= sub.industry_connectivity(10**6) <= 100

    @pytest.mark.asyncio
    async def test_composites_stay_in_range(self, memory_store):
        memory_store.add_enterprise(Enterprise(
            id="e1", name="Outlier", industry="steel", risk_level="unknown",
            registered_capital=1e15, supplier_count=10**6,
        ))
        memory_store.add_financial("e1", FinancialRecord(
            year=2025, net_profit=-1e9, roe=-5.0, debt_ratio=50.0,
        ))
        memory_store.set_engagement_stats("e1", EngagementStats(
            client_count=3, client_active_ratio=4.0, news_sentiment=9.0,
            prospect_total=1, prospect_converted=30, total_tasks=1, completed_tasks=-7,
        ))
        for i in range(100):
            memory_store.add_enterprise(Enterprise(id=f"t{i}", name=f"T{i}", industry="steel"))
            memory_store.add_edge(GraphEdge("e1", f"t{i}", "investment", 7.0))

        metrics = await ScoringEngine(memory_store).calculate_enterprise_score("e1")
        for value in metrics.to_dict().values():
            assert 0 <= value <= 100


class TestScoringEngine:
    @pytest.mark.asyncio
    async def test_bare_enterprise_defaults(self, memory_store):
        memory_store.add_enterprise(Enterprise(id="e1", name="Bare Co"))
        metrics = await ScoringEngine(memory_store).calculate_enterprise_score("e1")
        assert metrics.svs == pytest.approx(41.5, abs=0.01)
        assert metrics.des == pytest.approx(28.13, abs=0.01)
        assert metrics.nis == pytest.approx(24.5, abs=0.01)
        assert metrics.pcs == pytest.approx(42.0, abs=0.01)

    @pytest.mark.asyncio
    async def test_same_industry_targets_count_outgoing_only(self, memory_store):
        memory_store.add_enterprise(Enterprise(id="e1", name="A", industry="steel"))
        memory_store.add_enterprise(Enterprise(id="e2", name="B", industry="steel"))
        memory_store.add_enterprise(Enterprise(id="e3", name="C", industry="textile"))
        memory_store.add_enterprise(Enterprise(id="e4", name="D", industry="steel"))
        memory_store.add_edge(GraphEdge("e1", "e2", "supply", 1.0))
        memory_store.add_edge(GraphEdge("e1", "e2", "partnership", 1.0))
        memory_store.add_edge(GraphEdge("e1", "e3", "supply", 1.0))
        memory_store.add_edge(GraphEdge("e4", "e1", "supply", 1.0))

        metrics = await ScoringEngine(memory_store).calculate_enterprise_score("e1")
        # supply chain 28, investment 35, guarantee 15, industry 30 + 1 * 3
        assert metrics.nis == pytest.approx(28 * 0.3 + 35 * 0.25 + 15 * 0.25 + 33 * 0.2, abs=0.01)

    @pytest.mark.asyncio
    async def test_scores_stay_in_range(self, seeded_store):
        metrics = await ScoringEngine(seeded_store).calculate_enterprise_score("e1")
        for value in metrics.to_dict().values():
            assert 0 <= value <= 100

    @pytest.mark.asyncio
    async def test_calculate_does_not_persist(self, seeded_store):
        await ScoringEngine(seeded_store).calculate_enterprise_score("e1")
        assert seeded_store.get_scores("e1") is None

    @pytest.mark.asyncio
    async def test_recalculate_persists(self, seeded_store):
        metrics = await ScoringEngine(seeded_store).recalculate_scores("e1")
        saved = seeded_store.get_scores("e1")
        assert saved["svs"] == metrics.svs
        assert saved["pcs"] == metrics.pcs
        assert saved["updated_at"]

    @pytest.mark.asyncio
    async def test_unknown_enterprise(self, memory_store):
        with pytest.raises(NotFoundError):
            await ScoringEngine(memory_store).calculate_enterprise_score("zz")

    @pytest.mark.asyncio
    async def test_batch_isolates_failures(self, seeded_store):
        result = await ScoringEngine(seeded_store).batch_recalculate_scores(["e1", "zz", "e2"])
        assert set(result.results) == {"e1", "e2"}
        assert str(result.failures["zz"].cause) == "enterprise not found: zz"
        assert seeded_store.get_scores("e2") is not None

    @pytest.mark.asyncio
    async def test_batch_respects_max_ids(self, seeded_store):
        engine = ScoringEngine(seeded_store, max_batch_ids=2)
        with pytest.raises(ValidationError):
            await engine.batch_recalculate_scores(["e1", "e2", "e3"])

    @pytest.mark.asyncio
    async def test_sqlite_persistence(self, sqlite_store, seed_network):
        seed_network(sqlite_store)
        metrics = await ScoringEngine(sqlite_store).recalculate_scores("e1")
        assert sqlite_store.get_scores("e1")["des"] == metrics.des
