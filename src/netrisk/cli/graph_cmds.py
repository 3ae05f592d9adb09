"""CLI commands: graph path, influence, propagation, neighbourhood, stats."""

from __future__ import annotations

import argparse

from netrisk.analysis import RelationshipAnalyzer
from netrisk.cli._helpers import _execute, _split_ids


def cmd_graph_path(args: argparse.Namespace) -> int:
    async def action(store):
        result = await RelationshipAnalyzer(store).find_shortest_path(
            args.start, args.end, args.max_depth,
        )
        if result is None:
            return {"error": f"No path between {args.start} and {args.end}"}
        return result.to_dict()
    return _execute(args, action)


def cmd_graph_influence(args: argparse.Namespace) -> int:
    async def action(store):
        ids = _split_ids(args.ids) or None
        scores = await RelationshipAnalyzer(store).calculate_influence_scores(ids)
        return [s.to_dict() for s in scores[:args.limit]]
    return _execute(args, action)


def cmd_graph_propagate(args: argparse.Namespace) -> int:
    async def action(store):
        result = await RelationshipAnalyzer(store).analyze_risk_propagation(
            args.source, args.initial_risk, args.max_depth,
        )
        return result.to_dict()
    return _execute(args, action)


def cmd_graph_stats(args: argparse.Namespace) -> int:
    async def action(store):
        return await RelationshipAnalyzer(store).graph_stats()
    return _execute(args, action)


def cmd_graph_neighbourhood(args: argparse.Namespace) -> int:
    async def action(store):
        data = await RelationshipAnalyzer(store).neighbourhood(args.enterprise_id, args.depth)
        return {"center": args.enterprise_id, "depth": args.depth, **data.to_dict()}
    return _execute(args, action)
