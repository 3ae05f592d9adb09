"""CLI commands: risk assessment, factor status, warnings."""

from __future__ import annotations

import argparse

from netrisk.batch import batch_assess_risk
from netrisk.cli._helpers import _execute, _split_ids
from netrisk.config import Settings
from netrisk.risk import RiskAssessor
from netrisk.risk import warnings as warning_ops


def cmd_risk_assess(args: argparse.Namespace) -> int:
    async def action(store):
        assessment = await RiskAssessor(store).assess_enterprise_risk(args.enterprise_id)
        return assessment.to_dict()
    return _execute(args, action)


def cmd_risk_batch(args: argparse.Namespace) -> int:
    settings = Settings.from_env()

    async def action(store):
        result = await batch_assess_risk(
            RiskAssessor(store),
            _split_ids(args.ids),
            chunk_size=settings.batch_size,
            max_batch_ids=settings.max_batch_ids,
        )
        return result.to_dict()
    return _execute(args, action)


def cmd_risk_overview(args: argparse.Namespace) -> int:
    async def action(store):
        return await RiskAssessor(store).risk_overview()
    return _execute(args, action)


def cmd_risk_factor_status(args: argparse.Namespace) -> int:
    async def action(store):
        await RiskAssessor(store).update_risk_factor_status(args.factor_id, args.status)
        return {"ok": True, "factor_id": args.factor_id, "status": args.status}
    return _execute(args, action)


def cmd_warnings_list(args: argparse.Namespace) -> int:
    async def action(store):
        items = await warning_ops.list_warnings(
            store,
            is_read=False if args.unread else None,
            severity=args.severity,
            enterprise_id=args.enterprise_id,
            limit=args.limit,
        )
        return [w.to_dict() for w in items]
    return _execute(args, action)


def cmd_warnings_read(args: argparse.Namespace) -> int:
    async def action(store):
        await warning_ops.mark_warning_read(store, args.warning_id)
        return {"ok": True, "warning_id": args.warning_id}
    return _execute(args, action)


def cmd_warnings_resolve(args: argparse.Namespace) -> int:
    async def action(store):
        await warning_ops.resolve_warning(store, args.warning_id, args.resolved_by)
        return {"ok": True, "warning_id": args.warning_id, "resolved_by": args.resolved_by}
    return _execute(args, action)
