"""Shared CLI helpers."""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any, Awaitable, Callable

from netrisk.adapters.store_factory import create_store
from netrisk.errors import NetRiskError
from netrisk.ports import NetRiskStore


def _out(data: Any) -> int:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    if isinstance(data, dict) and "error" in data:
        return 1
    return 0


def _open_store(args: argparse.Namespace) -> NetRiskStore:
    return create_store(backend=args.backend, db_path=args.db)


def _execute(
    args: argparse.Namespace,
    action: Callable[[NetRiskStore], Awaitable[Any]],
) -> int:
    """Run *action* against a freshly opened store and print its JSON result."""
    store = _open_store(args)
    try:
        return _out(asyncio.run(action(store)))
    except NetRiskError as exc:
        return _out({"error": str(exc)})
    finally:
        store.close()


def _split_ids(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]
