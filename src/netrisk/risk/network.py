"""Network risk from an enterprise's direct business relationships."""

from __future__ import annotations

from collections import Counter

from netrisk.models import EnterpriseRelationship, NetworkRisk
from netrisk.risk._constants import (
    _CRITICAL_PATHS_CAP,
    _CRITICAL_PATHS_DIVISOR,
    _DEFAULT_RELATIONSHIP_WEIGHT,
    _INFLUENCED_BY_TYPES,
    _RELATIONSHIP_WEIGHT,
    _SCORE_CAP,
)


def relationship_weight(rel_type: str, strength: float) -> float:
    return _RELATIONSHIP_WEIGHT.get(rel_type, _DEFAULT_RELATIONSHIP_WEIGHT) * strength


def assess_network_risk(relationships: list[EnterpriseRelationship]) -> NetworkRisk:
    """Weight relationships by type and strength.

    Suppliers and guarantors count as influencing the enterprise; every
    other relationship counts as one the enterprise influences.
    """
    groups = Counter((r.type, r.strength) for r in relationships)

    propagation = 0.0
    influenced_by = 0
    influencing = 0
    for (rel_type, strength), count in groups.items():
        propagation += relationship_weight(rel_type, strength) * count
        if rel_type in _INFLUENCED_BY_TYPES:
            influenced_by += count
        else:
            influencing += count

    return NetworkRisk(
        propagation_score=min(propagation, _SCORE_CAP),
        influenced_by_count=influenced_by,
        influencing_count=influencing,
        critical_paths=min(influenced_by * influencing / _CRITICAL_PATHS_DIVISOR, _CRITICAL_PATHS_CAP),
    )
