"""CLI commands: enterprise scoring."""

from __future__ import annotations

import argparse

from netrisk.cli._helpers import _execute, _split_ids
from netrisk.config import Settings
from netrisk.scoring import ScoringEngine


def _engine(store) -> ScoringEngine:
    settings = Settings.from_env()
    return ScoringEngine(
        store, chunk_size=settings.batch_size, max_batch_ids=settings.max_batch_ids,
    )


def cmd_score_calc(args: argparse.Namespace) -> int:
    async def action(store):
        engine = _engine(store)
        if args.save:
            metrics = await engine.recalculate_scores(args.enterprise_id)
        else:
            metrics = await engine.calculate_enterprise_score(args.enterprise_id)
        return {"enterprise_id": args.enterprise_id, **metrics.to_dict()}
    return _execute(args, action)


def cmd_score_batch(args: argparse.Namespace) -> int:
    async def action(store):
        result = await _engine(store).batch_recalculate_scores(_split_ids(args.ids))
        return result.to_dict()
    return _execute(args, action)

