"""CLI for NetRisk: grouped subcommands.

Commands:
  netrisk graph {path, influence, propagate, neighbourhood, stats}
  netrisk risk {assess, batch, overview, factor-status}
  netrisk warnings {list, read, resolve}
  netrisk score {calc, batch}
  netrisk serve
"""

from __future__ import annotations

import sys

from netrisk.cli._helpers import _out  # noqa: F401  re-exported for tests
from netrisk.cli._parser import build_parser
from netrisk.cli.admin import cmd_serve
from netrisk.cli.graph_cmds import (
    cmd_graph_influence,
    cmd_graph_neighbourhood,
    cmd_graph_path,
    cmd_graph_propagate,
    cmd_graph_stats,
)
from netrisk.cli.risk_cmds import (
    cmd_risk_assess,
    cmd_risk_batch,
    cmd_risk_factor_status,
    cmd_risk_overview,
    cmd_warnings_list,
    cmd_warnings_read,
    cmd_warnings_resolve,
)
from netrisk.cli.score_cmds import cmd_score_batch, cmd_score_calc
from netrisk.observability import setup_logging


# ===================================================================
# Dispatch
# ===================================================================

_DISPATCH = {
    ("graph", "path"): cmd_graph_path,
    ("graph", "influence"): cmd_graph_influence,
    ("graph", "propagate"): cmd_graph_propagate,
    ("graph", "neighbourhood"): cmd_graph_neighbourhood,
    ("graph", "stats"): cmd_graph_stats,
    ("risk", "assess"): cmd_risk_assess,
    ("risk", "batch"): cmd_risk_batch,
    ("risk", "overview"): cmd_risk_overview,
    ("risk", "factor-status"): cmd_risk_factor_status,
    ("warnings", "list"): cmd_warnings_list,
    ("warnings", "read"): cmd_warnings_read,
    ("warnings", "resolve"): cmd_warnings_resolve,
    ("score", "calc"): cmd_score_calc,
    ("score", "batch"): cmd_score_batch,
    ("serve", None): cmd_serve,
}

# Map subcmd attr names to the dispatch key
_SUBCMD_ATTR = {
    "graph": "graph_cmd",
    "risk": "risk_cmd",
    "warnings": "warnings_cmd",
    "score": "score_cmd",
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level)

    subcmd_attr = _SUBCMD_ATTR.get(args.command)
    subcmd = getattr(args, subcmd_attr, None) if subcmd_attr else None
    handler = _DISPATCH.get((args.command, subcmd))
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)
