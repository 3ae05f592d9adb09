"""FastAPI application factory for netrisk.

Domain routers are mounted twice, under ``/api`` and ``/v1``; health and
metrics live at the root.  Every error body has the shape ``{"error": msg}``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from netrisk.adapters.store_factory import create_store
from netrisk.config import Settings
from netrisk.errors import NotFoundError, ValidationError
from netrisk.observability import add_observability_middleware
from netrisk.ports import NetRiskStore

from netrisk.api.routers import graph, health, risk, scoring, warnings

log = logging.getLogger("netrisk.api")

_DOMAIN_ROUTERS = (graph.router, risk.router, warnings.router, scoring.router)
_API_PREFIXES = ("/api", "/v1")
_STATUS_FOR_ERROR = {NotFoundError: 404, ValidationError: 400}


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def _describe_validation(exc: RequestValidationError) -> str:
    """``"query.end: Field required"`` for the first offending field."""
    for problem in exc.errors():
        where = ".".join(str(part) for part in problem.get("loc", ()))
        what = problem.get("msg", "Invalid input")
        return f"{where}: {what}" if where else what
    return "Invalid request"


def _install_error_handlers(app: FastAPI) -> None:
    async def domain_error(request: Request, exc: Exception) -> JSONResponse:
        status = next(code for kind, code in _STATUS_FOR_ERROR.items() if isinstance(exc, kind))
        return _error(status, str(exc))

    for error_type in _STATUS_FOR_ERROR:
        app.add_exception_handler(error_type, domain_error)

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return _error(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, _describe_validation(exc))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error(500, "internal server error")


def create_app(
    store: NetRiskStore | None = None,
    db_path: str | Path = "",
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application around *store*.

    Without a store one is opened from *settings* (or the environment);
    *db_path* overrides the configured SQLite path.
    """
    settings = settings or Settings.from_env()
    if store is None:
        store = create_store(
            backend=settings.db_backend,
            db_path=str(db_path) if db_path else settings.db_path,
        )

    app = FastAPI(
        title="netrisk",
        description="Enterprise relationship graph analysis and risk scoring",
        version="0.1.0",
    )
    app.state.store = store
    app.state.settings = settings

    _install_error_handlers(app)
    add_observability_middleware(app)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    api = APIRouter()
    for router in _DOMAIN_ROUTERS:
        api.include_router(router)
    for prefix in _API_PREFIXES:
        app.include_router(api, prefix=prefix)
    app.include_router(health.router)
    return app
