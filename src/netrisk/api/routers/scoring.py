"""Enterprise scoring endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from netrisk.api.deps import get_scoring
from netrisk.api.schemas import BatchIdsBody
from netrisk.scoring import ScoringEngine

router = APIRouter(tags=["scoring"])


@router.get("/enterprises/{enterprise_id}/score")
async def enterprise_score(
    enterprise_id: str,
    engine: ScoringEngine = Depends(get_scoring),
):
    metrics = await engine.calculate_enterprise_score(enterprise_id)
    return {"enterprise_id": enterprise_id, **metrics.to_dict()}


@router.post("/enterprises/{enterprise_id}/score")
async def enterprise_score_recalculate(
    enterprise_id: str,
    engine: ScoringEngine = Depends(get_scoring),
):
    metrics = await engine.recalculate_scores(enterprise_id)
    return {"enterprise_id": enterprise_id, "saved": True, **metrics.to_dict()}


@router.post("/enterprises/batch-score")
async def enterprise_batch_score(
    body: BatchIdsBody,
    engine: ScoringEngine = Depends(get_scoring),
):
    result = await engine.batch_recalculate_scores(body.enterprise_ids)
    return result.to_dict()
