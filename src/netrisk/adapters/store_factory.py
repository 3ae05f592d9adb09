"""Factory for creating the appropriate NetRiskStore backend.

Reads ``NETRISK_DB_BACKEND`` (default: ``sqlite``) and returns the
corresponding store implementation.
"""

from __future__ import annotations

import os
from pathlib import Path

from netrisk import defaults
from netrisk.ports import NetRiskStore


def create_store(
    *,
    backend: str | None = None,
    db_path: str | Path | None = None,
) -> NetRiskStore:
    """Create and return a ``NetRiskStore`` for the requested backend.

    Parameters
    ----------
    backend:
        ``"sqlite"`` or ``"memory"``.  Falls back to the
        ``NETRISK_DB_BACKEND`` env var (default ``"sqlite"``).
    db_path:
        Path to the SQLite file.  Only used when *backend* is ``"sqlite"``.
        Falls back to ``NETRISK_DB_PATH``.
    """
    backend = (
        backend or os.environ.get("NETRISK_DB_BACKEND", defaults.DEFAULT_DB_BACKEND)
    ).lower()

    if backend == "sqlite":
        from netrisk.adapters.sqlite_store import SqliteStore

        path = db_path or os.environ.get("NETRISK_DB_PATH", defaults.DEFAULT_DB_PATH)
        return SqliteStore(path)

    if backend == "memory":
        from netrisk.adapters.memory_store import MemoryStore

        return MemoryStore()

    raise ValueError(f"Unknown backend: {backend!r}  (expected 'sqlite' or 'memory')")
