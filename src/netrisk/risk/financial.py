"""Financial risk indicators from the most recent financial record."""

from __future__ import annotations

from netrisk.models import FinancialIndicator, FinancialRecord, FinancialRisk, IndicatorStatus
from netrisk.risk._constants import (
    _CURRENT_RATIO_CRITICAL,
    _CURRENT_RATIO_NAME,
    _CURRENT_RATIO_THRESHOLD,
    _DEBT_RATIO_CRITICAL,
    _DEBT_RATIO_NAME,
    _DEBT_RATIO_THRESHOLD,
    _INDICATOR_POINTS,
    _MISSING_DATA_NAME,
    _MISSING_DATA_SCORE,
    _NET_MARGIN_CRITICAL,
    _NET_MARGIN_NAME,
    _NET_MARGIN_THRESHOLD,
    _SCORE_CAP,
)


def _above(value: float, warning: float, critical: float) -> IndicatorStatus:
    if value > critical:
        return IndicatorStatus.CRITICAL
    if value > warning:
        return IndicatorStatus.WARNING
    return IndicatorStatus.NORMAL


def _below(value: float, warning: float, critical: float) -> IndicatorStatus:
    if value < critical:
        return IndicatorStatus.CRITICAL
    if value < warning:
        return IndicatorStatus.WARNING
    return IndicatorStatus.NORMAL


def financial_indicators(record: FinancialRecord) -> list[FinancialIndicator]:
    """Debt ratio, current ratio and net margin; an indicator with a zero denominator is skipped."""
    indicators: list[FinancialIndicator] = []

    if record.total_assets:
        debt_ratio = record.total_liabilities / record.total_assets * 100
        indicators.append(FinancialIndicator(
            name=_DEBT_RATIO_NAME,
            value=debt_ratio,
            threshold=_DEBT_RATIO_THRESHOLD,
            status=_above(debt_ratio, _DEBT_RATIO_THRESHOLD, _DEBT_RATIO_CRITICAL),
        ))

    if record.current_liabilities:
        current_ratio = record.current_assets / record.current_liabilities
        indicators.append(FinancialIndicator(
            name=_CURRENT_RATIO_NAME,
            value=current_ratio,
            threshold=_CURRENT_RATIO_THRESHOLD,
            status=_below(current_ratio, _CURRENT_RATIO_THRESHOLD, _CURRENT_RATIO_CRITICAL),
        ))

    if record.revenue:
        margin = record.net_profit / record.revenue * 100
        indicators.append(FinancialIndicator(
            name=_NET_MARGIN_NAME,
            value=margin,
            threshold=_NET_MARGIN_THRESHOLD,
            status=_below(margin, _NET_MARGIN_THRESHOLD, _NET_MARGIN_CRITICAL),
        ))

    return indicators


def assess_financial_risk(records: list[FinancialRecord]) -> FinancialRisk:
    """Score the latest of ``records`` (newest first).  No data scores 20."""
    if not records:
        return FinancialRisk(
            score=_MISSING_DATA_SCORE,
            indicators=[FinancialIndicator(
                name=_MISSING_DATA_NAME,
                value=0,
                threshold=1,
                status=IndicatorStatus.WARNING,
            )],
        )

    indicators = financial_indicators(records[0])
    total = sum(_INDICATOR_POINTS[i.status.value] for i in indicators)
    return FinancialRisk(score=min(total, _SCORE_CAP), indicators=indicators)
