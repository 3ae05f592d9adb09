"""Risk assessment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from netrisk.api.deps import get_assessor, get_settings
from netrisk.api.schemas import BatchIdsBody, FactorStatusBody
from netrisk.batch import batch_assess_risk
from netrisk.config import Settings
from netrisk.risk import RiskAssessor

router = APIRouter(tags=["risk"])


@router.post("/risk/assess/{enterprise_id}")
async def risk_assess(
    enterprise_id: str,
    assessor: RiskAssessor = Depends(get_assessor),
):
    assessment = await assessor.assess_enterprise_risk(enterprise_id)
    return assessment.to_dict()


@router.post("/risk/batch-assess")
async def risk_batch_assess(
    body: BatchIdsBody,
    assessor: RiskAssessor = Depends(get_assessor),
    settings: Settings = Depends(get_settings),
):
    result = await batch_assess_risk(
        assessor,
        body.enterprise_ids,
        chunk_size=settings.batch_size,
        max_batch_ids=settings.max_batch_ids,
    )
    return result.to_dict()


@router.get("/risk/overview")
async def risk_overview(assessor: RiskAssessor = Depends(get_assessor)):
    return await assessor.risk_overview()


@router.patch("/risk/factors/{factor_id}/status")
async def risk_factor_status(
    factor_id: str,
    body: FactorStatusBody,
    assessor: RiskAssessor = Depends(get_assessor),
):
    await assessor.update_risk_factor_status(factor_id, body.status)
    return {"ok": True, "factor_id": factor_id, "status": body.status.value}
