"""Argparse parser definition for the netrisk CLI."""

from __future__ import annotations

import argparse

from netrisk import defaults
from netrisk.config import Settings
from netrisk.models import FactorStatus, WarningSeverity


def build_parser(settings: Settings | None = None) -> argparse.ArgumentParser:
    settings = settings or Settings.from_env()
    parser = argparse.ArgumentParser(
        prog="netrisk",
        description="Enterprise relationship graph analysis and risk scoring",
    )
    parser.add_argument("--db", default=settings.db_path, help="SQLite database path")
    # MemoryStore does not persist across invocations
    parser.add_argument(
        "--backend", default="sqlite", choices=["sqlite"], help="Storage backend",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    sub = parser.add_subparsers(dest="command")

    _register_graph_commands(sub)
    _register_risk_commands(sub)
    _register_warning_commands(sub)
    _register_score_commands(sub)
    _register_server_commands(sub)

    return parser


def _register_graph_commands(sub: argparse._SubParsersAction) -> None:
    graph_p = sub.add_parser("graph", help="Relationship graph analysis")
    graph_sub = graph_p.add_subparsers(dest="graph_cmd")

    p = graph_sub.add_parser("path", help="Strongest-relationship path between two nodes")
    p.add_argument("--from", dest="start", required=True)
    p.add_argument("--to", dest="end", required=True)
    p.add_argument("--max-depth", type=float, default=defaults.DEFAULT_PATH_MAX_DEPTH)

    p = graph_sub.add_parser("influence", help="Approximate centrality scores")
    p.add_argument("--ids", help="Comma-separated node ids (default: all)")
    p.add_argument("--limit", type=int, default=defaults.QUERY_LIMIT_SMALL)

    p = graph_sub.add_parser("propagate", help="Simulate risk spreading from a node")
    p.add_argument("--source", required=True)
    p.add_argument("--initial-risk", type=float, default=defaults.DEFAULT_INITIAL_RISK)
    p.add_argument("--max-depth", type=int, default=defaults.DEFAULT_PROPAGATION_MAX_DEPTH)

    p = graph_sub.add_parser("neighbourhood", help="Subgraph within N hops of an enterprise")
    p.add_argument("--enterprise-id", required=True)
    p.add_argument(
        "--depth", type=int, default=defaults.DEFAULT_NEIGHBOURHOOD_DEPTH,
        choices=range(1, defaults.MAX_NEIGHBOURHOOD_DEPTH + 1), metavar="N",
    )

    graph_sub.add_parser("stats", help="Graph and enterprise statistics")


def _register_risk_commands(sub: argparse._SubParsersAction) -> None:
    risk_p = sub.add_parser("risk", help="Enterprise risk assessment")
    risk_sub = risk_p.add_subparsers(dest="risk_cmd")

    p = risk_sub.add_parser("assess", help="Assess one enterprise")
    p.add_argument("--enterprise-id", required=True)

    p = risk_sub.add_parser("batch", help="Assess several enterprises")
    p.add_argument("--ids", required=True, help="Comma-separated enterprise ids")

    risk_sub.add_parser("overview", help="Risk distribution and open warnings")

    p = risk_sub.add_parser("factor-status", help="Update a risk factor's status")
    p.add_argument("--factor-id", required=True)
    p.add_argument("--status", required=True, choices=[s.value for s in FactorStatus])


def _register_warning_commands(sub: argparse._SubParsersAction) -> None:
    warn_p = sub.add_parser("warnings", help="Risk warnings")
    warn_sub = warn_p.add_subparsers(dest="warnings_cmd")

    p = warn_sub.add_parser("list", help="List warnings, newest first")
    p.add_argument("--enterprise-id")
    p.add_argument("--severity", choices=[s.value for s in WarningSeverity])
    p.add_argument("--unread", action="store_true", help="Only unread warnings")
    p.add_argument("--limit", type=int, default=defaults.QUERY_LIMIT_SMALL)

    p = warn_sub.add_parser("read", help="Mark a warning as read")
    p.add_argument("--warning-id", required=True)

    p = warn_sub.add_parser("resolve", help="Resolve a warning")
    p.add_argument("--warning-id", required=True)
    p.add_argument("--by", dest="resolved_by", required=True)


def _register_score_commands(sub: argparse._SubParsersAction) -> None:
    score_p = sub.add_parser("score", help="Enterprise scores (SVS, DES, NIS, PCS)")
    score_sub = score_p.add_subparsers(dest="score_cmd")

    p = score_sub.add_parser("calc", help="Calculate scores for one enterprise")
    p.add_argument("--enterprise-id", required=True)
    p.add_argument("--save", action="store_true", help="Persist the scores")

    p = score_sub.add_parser("batch", help="Recalculate and persist scores")
    p.add_argument("--ids", required=True, help="Comma-separated enterprise ids")


def _register_server_commands(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("serve", help="Start HTTP API server")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8600)
