"""Component scores feeding SVS, DES, NIS and PCS.

Every function here is pure and returns a value clamped to [0, 100].
"""

from __future__ import annotations

from datetime import date

from netrisk.models import EngagementStats, Enterprise, FinancialRecord, GraphEdge
from netrisk.scoring._constants import (
    _CLIENT_ACTIVE_TIERS,
    _CLIENT_BASE,
    _CLIENT_COUNT_TIERS,
    _CLIENT_VALUE_TIERS,
    _COMMUNICATION_BASE,
    _COMMUNICATION_FACTOR,
    _CONNECTIVITY_BASE,
    _CONVERSION_BASE,
    _CONVERSION_FACTOR,
    _COOPERATION_COUNT_TIERS,
    _COOPERATION_STRENGTH_FACTOR,
    _CUSTOMER_TIERS,
    _DEBT_HIGH,
    _DEBT_HIGH_PENALTY,
    _DEBT_LOW_TIERS,
    _DECISION_BASE,
    _DECISION_CAPITAL_TIERS,
    _DECISION_YEARS_TIERS,
    _DEFAULT_AVG_STRENGTH,
    _DEFAULT_SENTIMENT,
    _DEMAND_BASE,
    _EVENT_TIERS,
    _FIN_BASE,
    _FIN_CAPITAL_TIERS,
    _GUARANTEE_BASE,
    _GUARANTEE_PER_EDGE,
    _INDUSTRY_BASE,
    _INDUSTRY_PER_TARGET,
    _INDUSTRY_PRESENT_BONUS,
    _INTERACTION_BASE,
    _INVESTMENT_BASE,
    _INVESTMENT_PER_EDGE,
    _INVESTMENT_STRENGTH_FACTOR,
    _LOSS_PENALTY,
    _MARKET_BASE,
    _NEWS_TIERS,
    _NO_PROSPECTS_SCORE,
    _NO_TASKS_SCORE,
    _PARTNER_TIERS,
    _PROFIT_BONUS,
    _RISK_LEVEL_DEFAULT,
    _RISK_LEVEL_SCORE,
    _ROE_HIGH,
    _ROE_HIGH_BONUS,
    _ROE_MID,
    _ROE_MID_BONUS,
    _ROE_NEGATIVE_PENALTY,
    _SCALE_BASE,
    _SCALE_CAPITAL_TIERS,
    _SCALE_CONNECTION_TIERS,
    _SCALE_YEARS_TIERS,
    _SCOPE_LENGTH_TIERS,
    _SCORE_MAX,
    _SCORE_MIN,
    _SENTIMENT_FACTOR,
    _SUPPLIER_TIERS,
    _SUPPLY_BASE,
    _SUPPLY_CHAIN_TYPES,
    _SUPPLY_PER_EDGE,
    _TASK_TIERS,
)


def clamp(value: float) -> float:
    return min(_SCORE_MAX, max(_SCORE_MIN, value))


def _tier(value: float | None, tiers: tuple[tuple[float, int], ...]) -> int:
    """Bonus of the first tier whose minimum ``value`` reaches, else 0."""
    if value is None:
        return 0
    for minimum, bonus in tiers:
        if value >= minimum:
            return bonus
    return 0


# ---------------------------------------------------------------------------
# SVS components
# ---------------------------------------------------------------------------

def financial_health(enterprise: Enterprise, latest: FinancialRecord | None) -> float:
    score = _FIN_BASE
    if latest is not None:
        if latest.roe is not None:
            if latest.roe > _ROE_HIGH:
                score += _ROE_HIGH_BONUS
            elif latest.roe > _ROE_MID:
                score += _ROE_MID_BONUS
            elif latest.roe < 0:
                score += _ROE_NEGATIVE_PENALTY
        if latest.debt_ratio is not None:
            if latest.debt_ratio > _DEBT_HIGH:
                score += _DEBT_HIGH_PENALTY
            else:
                for ceiling, bonus in _DEBT_LOW_TIERS:
                    if latest.debt_ratio < ceiling:
                        score += bonus
                        break
        if latest.net_profit > 0:
            score += _PROFIT_BONUS
        elif latest.net_profit < 0:
            score += _LOSS_PENALTY
    score += _tier(enterprise.registered_capital, _FIN_CAPITAL_TIERS)
    return clamp(score)


def company_scale(enterprise: Enterprise, today: date | None = None) -> float:
    connections = enterprise.supplier_count + enterprise.customer_count + enterprise.partner_count
    score = (
        _SCALE_BASE
        + _tier(enterprise.registered_capital, _SCALE_CAPITAL_TIERS)
        + _tier(enterprise.years_in_business(today), _SCALE_YEARS_TIERS)
        + _tier(connections, _SCALE_CONNECTION_TIERS)
    )
    return clamp(score)


def risk_level_score(risk_level: str | None) -> float:
    return float(_RISK_LEVEL_SCORE.get(risk_level or "", _RISK_LEVEL_DEFAULT))


def network_connectivity(enterprise: Enterprise) -> float:
    score = (
        _CONNECTIVITY_BASE
        + _tier(enterprise.supplier_count, _SUPPLIER_TIERS)
        + _tier(enterprise.customer_count, _CUSTOMER_TIERS)
        + _tier(enterprise.partner_count, _PARTNER_TIERS)
    )
    return clamp(score)


# ---------------------------------------------------------------------------
# DES components
# ---------------------------------------------------------------------------

def client_quality(stats: EngagementStats) -> float:
    if stats.client_count == 0:
        return float(_CLIENT_BASE)
    score = (
        _CLIENT_BASE
        + _tier(stats.client_count, _CLIENT_COUNT_TIERS)
        + _tier(stats.client_active_ratio, _CLIENT_ACTIVE_TIERS)
        + _tier(stats.client_avg_value, _CLIENT_VALUE_TIERS)
    )
    return clamp(score)


def interaction_frequency(stats: EngagementStats) -> float:
    score = (
        _INTERACTION_BASE
        + _tier(stats.recent_task_count, _TASK_TIERS)
        + _tier(stats.recent_event_count, _EVENT_TIERS)
    )
    return clamp(score)


def cooperation_depth(edges: list[GraphEdge]) -> float:
    avg_strength = (
        sum(e.strength for e in edges) / len(edges) if edges else _DEFAULT_AVG_STRENGTH
    )
    score = avg_strength * _COOPERATION_STRENGTH_FACTOR + _tier(len(edges), _COOPERATION_COUNT_TIERS)
    return clamp(score)


def market_activity(stats: EngagementStats) -> float:
    sentiment = _DEFAULT_SENTIMENT if stats.news_sentiment is None else stats.news_sentiment
    score = _MARKET_BASE + _tier(stats.news_count, _NEWS_TIERS) + sentiment * _SENTIMENT_FACTOR
    return clamp(score)


# ---------------------------------------------------------------------------
# NIS components
# ---------------------------------------------------------------------------

def supply_chain_influence(edges: list[GraphEdge]) -> float:
    count = sum(1 for e in edges if e.type in _SUPPLY_CHAIN_TYPES)
    return clamp(_SUPPLY_BASE + count * _SUPPLY_PER_EDGE)


def investment_influence(edges: list[GraphEdge]) -> float:
    investments = [e for e in edges if e.type == "investment"]
    avg_strength = (
        sum(e.strength for e in investments) / len(investments)
        if investments else _DEFAULT_AVG_STRENGTH
    )
    return clamp(
        _INVESTMENT_BASE
        + len(investments) * _INVESTMENT_PER_EDGE
        + avg_strength * _INVESTMENT_STRENGTH_FACTOR
    )


def guarantee_influence(edges: list[GraphEdge]) -> float:
    count = sum(1 for e in edges if e.type == "guarantee")
    return clamp(_GUARANTEE_BASE + count * _GUARANTEE_PER_EDGE)


def industry_connectivity(same_industry_targets: int) -> float:
    return clamp(_INDUSTRY_BASE + same_industry_targets * _INDUSTRY_PER_TARGET)


# ---------------------------------------------------------------------------
# PCS components
# ---------------------------------------------------------------------------

def conversion_history(stats: EngagementStats) -> float:
    if stats.prospect_total == 0:
        return float(_NO_PROSPECTS_SCORE)
    rate = stats.prospect_converted / stats.prospect_total
    return clamp(_CONVERSION_BASE + rate * _CONVERSION_FACTOR)


def communication_quality(stats: EngagementStats) -> float:
    if stats.total_tasks == 0:
        return float(_NO_TASKS_SCORE)
    rate = stats.completed_tasks / stats.total_tasks
    return clamp(_COMMUNICATION_BASE + rate * _COMMUNICATION_FACTOR)


def demand_match(enterprise: Enterprise) -> float:
    score = _DEMAND_BASE + _tier(len(enterprise.business_scope or ""), _SCOPE_LENGTH_TIERS)
    if enterprise.industry:
        score += _INDUSTRY_PRESENT_BONUS
    return clamp(score)


def decision_capability(enterprise: Enterprise, today: date | None = None) -> float:
    score = (
        _DECISION_BASE
        + _tier(enterprise.registered_capital, _DECISION_CAPITAL_TIERS)
        + _tier(enterprise.years_in_business(today), _DECISION_YEARS_TIERS)
    )
    return clamp(score)
