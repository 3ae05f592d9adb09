"""Composite enterprise risk assessment."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import timedelta
from typing import Any

from netrisk import defaults
from netrisk.errors import NotFoundError, ValidationError
from netrisk.models import FactorStatus, RiskAssessment, RiskLevel, now_utc
from netrisk.observability import inc, span
from netrisk.ports import NetRiskStore
from netrisk.risk.factors import overall_risk_score, risk_level, score_risk_factors
from netrisk.risk.financial import assess_financial_risk
from netrisk.risk.network import assess_network_risk
from netrisk.risk.warnings import assessment_warnings, emit_warnings

log = logging.getLogger("netrisk.risk")


class RiskAssessor:
    """Assess enterprises against a store.  Holds no per-call state."""

    def __init__(self, store: NetRiskStore) -> None:
        self._store = store

    @property
    def store(self) -> NetRiskStore:
        return self._store

    async def assess_enterprise_risk(self, enterprise_id: str) -> RiskAssessment:
        """Score factors, network and financials, then emit warnings.

        Raises ``NotFoundError`` when the enterprise does not exist.  Warning
        persistence failures are logged and never affect the result.
        """
        enterprise = await self._store.get_entity(enterprise_id)
        if enterprise is None:
            raise NotFoundError("enterprise", enterprise_id)

        with span("netrisk.risk.load", enterprise_id=enterprise_id):
            raw_factors, relationships, financials = await asyncio.gather(
                self._store.get_active_risk_factors(enterprise_id),
                self._store.get_relationships(enterprise_id),
                self._store.get_latest_financials(
                    enterprise_id, defaults.FINANCIAL_HISTORY_LIMIT,
                ),
            )
        factors = score_risk_factors(raw_factors)
        network = assess_network_risk(relationships)
        financial = assess_financial_risk(financials)
        score = overall_risk_score(factors, network, financial)
        level = risk_level(score)

        _, failed = await emit_warnings(
            self._store,
            assessment_warnings(enterprise_id, enterprise.name, level, factors),
        )

        assessed_at = now_utc()
        inc("netrisk_assessments_total", level=level.value)
        log.info(
            "Assessed %s: %s (%d), %d warning(s) not saved",
            enterprise_id, level.value, score, len(failed),
            extra={"enterprise_id": enterprise_id},
        )
        return RiskAssessment(
            enterprise_id=enterprise_id,
            enterprise_name=enterprise.name,
            overall_risk_level=level,
            overall_risk_score=score,
            risk_factors=tuple(factors),
            network_risk=network,
            financial_risk=financial,
            assessment_date=assessed_at,
            valid_until=assessed_at + timedelta(days=defaults.ASSESSMENT_VALIDITY_DAYS),
        )

    async def update_risk_factor_status(
        self, factor_id: str, status: FactorStatus | str,
    ) -> None:
        try:
            status = FactorStatus(status)
        except ValueError:
            raise ValidationError(f"invalid risk factor status: {status}") from None
        if not await self._store.update_risk_factor_status(factor_id, status):
            raise NotFoundError("risk factor", factor_id)
        log.info("Risk factor %s -> %s", factor_id, status.value)

    async def risk_overview(self) -> dict[str, Any]:
        """Counts of enterprises by stored risk level and of open warnings."""
        enterprises, warnings = await asyncio.gather(
            self._store.list_entities(defaults.QUERY_LIMIT_LARGE),
            self._store.list_warnings(),
        )
        distribution = {level.value: 0 for level in RiskLevel}
        distribution.update(
            Counter(e.risk_level for e in enterprises if e.risk_level in distribution),
        )
        open_warnings = [w for w in warnings if w.resolved_at is None]
        return {
            "total_enterprises": len(enterprises),
            "risk_distribution": distribution,
            "active_warnings": len(open_warnings),
            "unread_warnings": sum(1 for w in open_warnings if not w.is_read),
            "critical_warnings": sum(
                1 for w in open_warnings if w.severity.value == "critical"
            ),
        }
