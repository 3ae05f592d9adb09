"""Pydantic request models for strict input validation."""

from __future__ import annotations

from pydantic import BaseModel, Field

from netrisk.models import FactorStatus, WarningSeverity, WarningType


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

class BatchIdsBody(BaseModel):
    enterprise_ids: list[str] = Field(..., description="Enterprise ids to process")


# ---------------------------------------------------------------------------
# Risk factors
# ---------------------------------------------------------------------------

class FactorStatusBody(BaseModel):
    status: FactorStatus


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------

class CreateWarningBody(BaseModel):
    enterprise_id: str = Field(..., min_length=1)
    warning_type: WarningType
    severity: WarningSeverity
    message: str = Field(..., min_length=1)
    risk_factor_id: str | None = None


class ResolveWarningBody(BaseModel):
    resolved_by: str = Field(..., min_length=1)
