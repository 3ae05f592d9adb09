"""Enterprise risk assessment: factors, network, financials, warnings.

The composite score blends three signals:
  - risk factors:  severity base * category multiplier, summed (weight 0.4)
  - network risk:  relationships weighted by type and strength (weight 0.3)
  - financial:     debt ratio, current ratio and net margin (weight 0.3)

High and critical results raise warnings, which are persisted best-effort.
"""

from netrisk.risk.assessment import RiskAssessor
from netrisk.risk.factors import overall_risk_score, risk_level, score_risk_factor
from netrisk.risk.financial import assess_financial_risk, financial_indicators
from netrisk.risk.network import assess_network_risk, relationship_weight
from netrisk.risk.warnings import (
    assessment_warnings,
    create_warning,
    emit_warnings,
    list_warnings,
    mark_warning_read,
    resolve_warning,
)

__all__ = [
    "RiskAssessor",
    "assess_financial_risk",
    "assess_network_risk",
    "assessment_warnings",
    "create_warning",
    "emit_warnings",
    "financial_indicators",
    "list_warnings",
    "mark_warning_read",
    "overall_risk_score",
    "relationship_weight",
    "resolve_warning",
    "risk_level",
    "score_risk_factor",
]
