"""Liveness, readiness and Prometheus metrics (mounted without a prefix)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from netrisk.api.deps import get_store
from netrisk.models import now_iso
from netrisk.observability import generate_metrics
from netrisk.ports import NetRiskStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store: NetRiskStore = Depends(get_store)):
    return {"status": "ok", "store": type(store).__name__, "timestamp": now_iso()}


@router.get("/health/ready")
async def health_ready(store: NetRiskStore = Depends(get_store)):
    """Ready once the store answers an entity query."""
    try:
        await store.list_entities(1)
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "error": str(exc), "timestamp": now_iso()},
        )
    return {"status": "ok", "timestamp": now_iso()}


@router.get("/metrics")
def metrics():
    return Response(content=generate_metrics(), media_type="text/plain; version=0.0.4")
