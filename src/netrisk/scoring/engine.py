"""Enterprise scoring: SVS, DES, NIS and PCS.

  - SVS  supplier value:      financial health, scale, risk level, connectivity
  - DES  demand engagement:   clients, interaction, cooperation depth, market activity
  - NIS  network influence:   supply chain, investment, guarantee, same-industry links
  - PCS  prospect conversion: conversion history, communication, demand match, decision capability
"""

from __future__ import annotations

import asyncio
import logging

from netrisk.batch import run_in_chunks, validate_batch_ids
from netrisk.errors import NotFoundError
from netrisk.models import BatchResult, Enterprise, GraphEdge, ScoringMetrics, round_half_up
from netrisk.ports import NetRiskStore
from netrisk.scoring import subscores as sub
from netrisk.scoring._constants import (
    _DES_W_CLIENTS,
    _DES_W_COOPERATION,
    _DES_W_INTERACTION,
    _DES_W_MARKET,
    _NIS_W_GUARANTEE,
    _NIS_W_INDUSTRY,
    _NIS_W_INVESTMENT,
    _NIS_W_SUPPLY,
    _PCS_W_COMMUNICATION,
    _PCS_W_CONVERSION,
    _PCS_W_DECISION,
    _PCS_W_DEMAND,
    _SVS_W_CONNECTIVITY,
    _SVS_W_FINANCIAL,
    _SVS_W_RISK,
    _SVS_W_SCALE,
)

log = logging.getLogger("netrisk.scoring")


class ScoringEngine:
    def __init__(
        self,
        store: NetRiskStore,
        *,
        chunk_size: int | None = None,
        max_batch_ids: int | None = None,
    ) -> None:
        self._store = store
        self._chunk_size = chunk_size
        self._max_batch_ids = max_batch_ids

    async def calculate_enterprise_score(self, enterprise_id: str) -> ScoringMetrics:
        """Compute the four scores concurrently, each rounded to 2 decimals."""
        enterprise = await self._store.get_entity(enterprise_id)
        if enterprise is None:
            raise NotFoundError("enterprise", enterprise_id)

        svs, des, nis, pcs = await asyncio.gather(
            self._svs(enterprise),
            self._des(enterprise),
            self._nis(enterprise),
            self._pcs(enterprise),
        )
        return ScoringMetrics(
            svs=round_half_up(svs, 2),
            des=round_half_up(des, 2),
            nis=round_half_up(nis, 2),
            pcs=round_half_up(pcs, 2),
        )

    async def recalculate_scores(self, enterprise_id: str) -> ScoringMetrics:
        metrics = await self.calculate_enterprise_score(enterprise_id)
        await self._store.save_scores(enterprise_id, metrics)
        log.info(
            "Scores saved for %s", enterprise_id,
            extra={"enterprise_id": enterprise_id},
        )
        return metrics

    async def batch_recalculate_scores(self, enterprise_ids: list[str]) -> BatchResult:
        ids = validate_batch_ids(enterprise_ids, self._max_batch_ids)
        return await run_in_chunks(ids, self.recalculate_scores, self._chunk_size)

    # ------------------------------------------------------------------
    # Composite scores
    # ------------------------------------------------------------------

    async def _svs(self, enterprise: Enterprise) -> float:
        records = await self._store.get_latest_financials(enterprise.id, 1)
        latest = records[0] if records else None
        score = (
            sub.financial_health(enterprise, latest) * _SVS_W_FINANCIAL
            + sub.company_scale(enterprise) * _SVS_W_SCALE
            + sub.risk_level_score(enterprise.risk_level) * _SVS_W_RISK
            + sub.network_connectivity(enterprise) * _SVS_W_CONNECTIVITY
        )
        return sub.clamp(score)

    async def _des(self, enterprise: Enterprise) -> float:
        stats, edges = await asyncio.gather(
            self._store.get_engagement_stats(enterprise.id),
            self._store.get_incident_edges(enterprise.id),
        )
        score = (
            sub.client_quality(stats) * _DES_W_CLIENTS
            + sub.interaction_frequency(stats) * _DES_W_INTERACTION
            + sub.cooperation_depth(edges) * _DES_W_COOPERATION
            + sub.market_activity(stats) * _DES_W_MARKET
        )
        return sub.clamp(score)

    async def _nis(self, enterprise: Enterprise) -> float:
        edges = await self._store.get_incident_edges(enterprise.id)
        same_industry = await self._same_industry_targets(enterprise, edges)
        score = (
            sub.supply_chain_influence(edges) * _NIS_W_SUPPLY
            + sub.investment_influence(edges) * _NIS_W_INVESTMENT
            + sub.guarantee_influence(edges) * _NIS_W_GUARANTEE
            + sub.industry_connectivity(same_industry) * _NIS_W_INDUSTRY
        )
        return sub.clamp(score)

    async def _pcs(self, enterprise: Enterprise) -> float:
        stats = await self._store.get_engagement_stats(enterprise.id)
        score = (
            sub.conversion_history(stats) * _PCS_W_CONVERSION
            + sub.communication_quality(stats) * _PCS_W_COMMUNICATION
            + sub.demand_match(enterprise) * _PCS_W_DEMAND
            + sub.decision_capability(enterprise) * _PCS_W_DECISION
        )
        return sub.clamp(score)

    async def _same_industry_targets(
        self, enterprise: Enterprise, edges: list[GraphEdge],
    ) -> int:
        """Distinct outgoing edge targets sharing the enterprise's industry."""
        if not enterprise.industry:
            return 0
        targets = sorted({e.target for e in edges if e.source == enterprise.id})
        others = await asyncio.gather(*(self._store.get_entity(t) for t in targets))
        return sum(1 for o in others if o is not None and o.industry == enterprise.industry)
