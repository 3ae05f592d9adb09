"""Structured logging, optional tracing and domain counters.

Counters are kept in-process and rendered as Prometheus text on ``/metrics``:

  netrisk_http_requests_total{method,route,status}
  netrisk_assessments_total{level}
  netrisk_warnings_emitted_total{type}
  netrisk_warning_failures_total{type}
  netrisk_batch_items_total{outcome}

Tracing needs the ``otel`` extra; without it ``span()`` is a no-op.
"""

from __future__ import annotations

import json
import logging
import time
from collections import Counter
from contextlib import nullcontext
from typing import Any, ContextManager

from fastapi import FastAPI, Request, Response

# Record attributes copied into the JSON line when present
_CONTEXT_KEYS = ("enterprise_id", "warning_type", "route", "status_code", "duration_ms")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class JsonFormatter(logging.Formatter):
    """One JSON object per record, non-ASCII kept readable."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, getattr(record, key))
            for key in _CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str, ensure_ascii=False)


def setup_logging(level: str = "INFO") -> None:
    """Replace root handlers with a single JSON stream handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Tracing (optional)
# ---------------------------------------------------------------------------

try:
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    _HAS_OTLP = True
except ImportError:
    _HAS_OTLP = False

_tracer = None


def setup_tracing(service_name: str = "netrisk") -> bool:
    """Export spans over OTLP/HTTP.  Returns False when the extra is missing."""
    global _tracer
    if not _HAS_OTLP:
        return False
    provider = TracerProvider()
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)
    return True


def span(name: str, **attributes: Any) -> ContextManager:
    if _tracer is None:
        return nullcontext()
    return _tracer.start_as_current_span(name, attributes=attributes)


# ---------------------------------------------------------------------------
# Domain counters
# ---------------------------------------------------------------------------

_METRICS = {
    "netrisk_http_requests_total": "HTTP requests by method, route and status.",
    "netrisk_assessments_total": "Risk assessments completed, by resulting level.",
    "netrisk_warnings_emitted_total": "Risk warnings persisted, by warning type.",
    "netrisk_warning_failures_total": "Risk warnings that could not be persisted.",
    "netrisk_batch_items_total": "Batch items processed, by outcome.",
}

_counters: dict[str, Counter] = {name: Counter() for name in _METRICS}


def inc(metric: str, **labels: str) -> None:
    """Add one to ``metric`` for this label set.  Unknown names raise KeyError."""
    _counters[metric][tuple(sorted(labels.items()))] += 1


def metric_value(metric: str, **labels: str) -> int:
    return _counters[metric][tuple(sorted(labels.items()))]


def reset_metrics() -> None:
    for counter in _counters.values():
        counter.clear()


def generate_metrics() -> str:
    """Prometheus text exposition of every counter."""
    lines: list[str] = []
    for metric, help_text in _METRICS.items():
        lines.append(f"# HELP {metric} {help_text}")
        lines.append(f"# TYPE {metric} counter")
        for labels, value in sorted(_counters[metric].items()):
            rendered = ",".join(f'{key}="{val}"' for key, val in labels)
            lines.append(f"{metric}{{{rendered}}} {value}")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Request middleware
# ---------------------------------------------------------------------------

def add_observability_middleware(app: FastAPI) -> None:
    access_log = logging.getLogger("netrisk.access")

    @app.middleware("http")
    async def observe_request(request: Request, call_next) -> Response:
        started = time.perf_counter()
        with span(f"{request.method} {request.url.path}"):
            response: Response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

        # templated route once the router has matched, raw path otherwise
        route = getattr(request.scope.get("route"), "path", request.url.path)
        inc(
            "netrisk_http_requests_total",
            method=request.method, route=route, status=str(response.status_code),
        )
        access_log.info(
            "%s %s %d", request.method, request.url.path, response.status_code,
            extra={"route": route, "status_code": response.status_code, "duration_ms": elapsed_ms},
        )
        return response
