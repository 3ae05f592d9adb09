"""Request-scoped service construction from ``app.state``."""

from __future__ import annotations

from fastapi import Request

from netrisk.analysis import RelationshipAnalyzer
from netrisk.config import Settings
from netrisk.ports import NetRiskStore
from netrisk.risk import RiskAssessor
from netrisk.scoring import ScoringEngine


def get_store(request: Request) -> NetRiskStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_analyzer(request: Request) -> RelationshipAnalyzer:
    return RelationshipAnalyzer(get_store(request))


def get_assessor(request: Request) -> RiskAssessor:
    return RiskAssessor(get_store(request))


def get_scoring(request: Request) -> ScoringEngine:
    settings = get_settings(request)
    return ScoringEngine(
        get_store(request),
        chunk_size=settings.batch_size,
        max_batch_ids=settings.max_batch_ids,
    )
