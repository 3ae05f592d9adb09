"""Risk factor scoring and the composite score/level."""

from __future__ import annotations

import dataclasses

from netrisk.models import (
    FinancialRisk,
    NetworkRisk,
    RiskFactor,
    RiskLevel,
    round_half_up,
)
from netrisk.risk._constants import (
    _CATEGORY_MULTIPLIER,
    _DEFAULT_CATEGORY_MULTIPLIER,
    _LEVEL_CUTOFFS,
    _SCORE_CAP,
    _SEVERITY_BASE,
    _W_FACTORS,
    _W_FINANCIAL,
    _W_NETWORK,
)


def score_risk_factor(factor: RiskFactor) -> int:
    base = _SEVERITY_BASE.get(factor.severity.value, 0)
    multiplier = _CATEGORY_MULTIPLIER.get(factor.category, _DEFAULT_CATEGORY_MULTIPLIER)
    return int(round_half_up(base * multiplier))


def score_risk_factors(factors: list[RiskFactor]) -> list[RiskFactor]:
    """Return copies of ``factors`` with ``score`` recomputed from severity and category."""
    return [dataclasses.replace(f, score=score_risk_factor(f)) for f in factors]


def overall_risk_score(
    factors: list[RiskFactor],
    network: NetworkRisk,
    financial: FinancialRisk,
) -> int:
    """Fixed 0.4 / 0.3 / 0.3 blend of factor sum, network and financial risk, capped at 100."""
    blended = (
        sum(f.score for f in factors) * _W_FACTORS
        + network.propagation_score * _W_NETWORK
        + financial.score * _W_FINANCIAL
    )
    return int(min(round_half_up(blended), _SCORE_CAP))


def risk_level(score: float) -> RiskLevel:
    for cutoff, level in _LEVEL_CUTOFFS:
        if score >= cutoff:
            return RiskLevel(level)
    return RiskLevel.LOW
