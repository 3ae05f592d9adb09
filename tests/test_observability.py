"""Tests for structured logging, domain counters and tracing."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from netrisk import observability as obs


class TestJsonFormatter:
    def _record(self, msg, **extra):
        record = logging.LogRecord("netrisk.risk", logging.INFO, __file__, 1, msg, (), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        out = json.loads(obs.JsonFormatter().format(self._record("assessed")))
        assert out["level"] == "INFO"
        assert out["logger"] == "netrisk.risk"
        assert out["message"] == "assessed"
        assert "enterprise_id" not in out

    def test_extra_keys_and_unicode(self):
        line = obs.JsonFormatter().format(self._record("资产负债率 high", enterprise_id="e1"))
        assert "资产负债率" in line
        assert json.loads(line)["enterprise_id"] == "e1"

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "netrisk", logging.ERROR, __file__, 1, "failed", (), sys.exc_info(),
            )
        out = json.loads(obs.JsonFormatter().format(record))
        assert "RuntimeError: boom" in out["exception"]


class TestSetupLogging:
    def test_configures_root_logger(self):
        obs.setup_logging("debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, obs.JsonFormatter)

    def test_unknown_level_falls_back_to_info(self):
        obs.setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO


class TestDomainCounters:
    def test_labels_render_sorted(self):
        obs.inc("netrisk_http_requests_total", status="200", route="/api/graph/stats", method="GET")
        obs.inc("netrisk_http_requests_total", method="GET", route="/api/graph/stats", status="200")
        obs.inc("netrisk_assessments_total", level="high")
        text = obs.generate_metrics()
        assert (
            'netrisk_http_requests_total{method="GET",route="/api/graph/stats",status="200"} 2'
            in text
        )
        assert 'netrisk_assessments_total{level="high"} 1' in text
        assert "# TYPE netrisk_batch_items_total counter" in text

    def test_unknown_metric_is_rejected(self):
        with pytest.raises(KeyError):
            obs.inc("netrisk_typo_total")

    def test_reset(self):
        obs.inc("netrisk_batch_items_total", outcome="ok")
        obs.reset_metrics()
        assert obs.metric_value("netrisk_batch_items_total", outcome="ok") == 0
        assert "outcome=" not in obs.generate_metrics()


class TestTracing:
    def test_span_is_noop_without_tracer(self):
        with obs.span("netrisk.test", enterprise_id="e1") as current:
            assert current is None
