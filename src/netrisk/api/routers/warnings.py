"""Risk warning endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from netrisk import defaults
from netrisk.api.deps import get_store
from netrisk.api.schemas import CreateWarningBody, ResolveWarningBody
from netrisk.ports import NetRiskStore
from netrisk.risk import warnings as warning_ops

router = APIRouter(tags=["warnings"])


@router.get("/risk/warnings")
async def warnings_list(
    is_read: bool | None = None,
    severity: str | None = None,
    enterprise_id: str | None = None,
    limit: int = Query(defaults.QUERY_LIMIT_SMALL, ge=1, le=defaults.QUERY_LIMIT_MAX_PAGE),
    store: NetRiskStore = Depends(get_store),
):
    items = await warning_ops.list_warnings(
        store,
        is_read=is_read,
        severity=severity,
        enterprise_id=enterprise_id,
        limit=limit,
    )
    return [w.to_dict() for w in items]


@router.post("/risk/warnings", status_code=201)
async def warnings_create(
    body: CreateWarningBody,
    store: NetRiskStore = Depends(get_store),
):
    warning = await warning_ops.create_warning(
        store,
        body.enterprise_id,
        body.warning_type,
        body.severity,
        body.message,
        body.risk_factor_id,
    )
    return warning.to_dict()


@router.patch("/risk/warnings/{warning_id}/read")
async def warnings_mark_read(
    warning_id: str,
    store: NetRiskStore = Depends(get_store),
):
    await warning_ops.mark_warning_read(store, warning_id)
    return {"ok": True, "warning_id": warning_id}


@router.patch("/risk/warnings/{warning_id}/resolve")
async def warnings_resolve(
    warning_id: str,
    body: ResolveWarningBody,
    store: NetRiskStore = Depends(get_store),
):
    await warning_ops.resolve_warning(store, warning_id, body.resolved_by)
    return {"ok": True, "warning_id": warning_id, "resolved_by": body.resolved_by}
