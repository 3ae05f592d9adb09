"""Bounded-concurrency batch execution.

Items run in fixed-size chunks: every item of a chunk runs concurrently and
the chunk fully resolves before the next one starts.  A failing item is
recorded in ``BatchResult.failures`` and never disturbs its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from netrisk import defaults
from netrisk.errors import PartialBatchFailure, ValidationError
from netrisk.models import BatchResult
from netrisk.observability import inc, span

if TYPE_CHECKING:
    from netrisk.risk.assessment import RiskAssessor

log = logging.getLogger("netrisk.batch")


def validate_batch_ids(ids: list[str] | None, max_ids: int | None = None) -> list[str]:
    limit = max_ids or defaults.MAX_BATCH_IDS
    if not ids:
        raise ValidationError("at least one enterprise id is required")
    if len(ids) > limit:
        raise ValidationError(f"at most {limit} enterprise ids per batch, got {len(ids)}")
    if any(not isinstance(i, str) or not i.strip() for i in ids):
        raise ValidationError("enterprise ids must be non-empty strings")
    return list(ids)


async def run_in_chunks(
    ids: list[str],
    worker: Callable[[str], Awaitable[Any]],
    chunk_size: int | None = None,
) -> BatchResult:
    size = chunk_size or defaults.BATCH_CHUNK_SIZE
    result = BatchResult()
    for start in range(0, len(ids), size):
        chunk = ids[start:start + size]
        with span("netrisk.batch.chunk", offset=start, size=len(chunk)):
            outcomes = await asyncio.gather(*(worker(i) for i in chunk), return_exceptions=True)
        for item_id, outcome in zip(chunk, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failure = PartialBatchFailure(item_id, outcome)
                log.warning("%s", failure, extra={"enterprise_id": item_id})
                result.failures[item_id] = failure
                inc("netrisk_batch_items_total", outcome="failed")
            else:
                result.results[item_id] = outcome
                inc("netrisk_batch_items_total", outcome="ok")
    log.info(
        "Batch finished: %d ok, %d failed",
        len(result.results), len(result.failures),
    )
    return result


async def batch_assess_risk(
    assessor: RiskAssessor,
    ids: list[str],
    *,
    chunk_size: int | None = None,
    max_batch_ids: int | None = None,
) -> BatchResult:
    """Assess every id; ``results`` maps id to ``RiskAssessment`` for the successes."""
    valid = validate_batch_ids(ids, max_batch_ids)
    return await run_in_chunks(valid, assessor.assess_enterprise_risk, chunk_size)
