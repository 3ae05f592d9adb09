"""Runtime settings read from ``NETRISK_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from netrisk import defaults


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    db_backend: str = defaults.DEFAULT_DB_BACKEND
    db_path: str = defaults.DEFAULT_DB_PATH
    log_level: str = "INFO"
    batch_size: int = defaults.BATCH_CHUNK_SIZE
    max_batch_ids: int = defaults.MAX_BATCH_IDS

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if env is None else env
        return cls(
            db_backend=env.get("NETRISK_DB_BACKEND", defaults.DEFAULT_DB_BACKEND).lower(),
            db_path=env.get("NETRISK_DB_PATH", defaults.DEFAULT_DB_PATH),
            log_level=env.get("NETRISK_LOG_LEVEL", "INFO").upper(),
            batch_size=_int_env(env, "NETRISK_BATCH_SIZE", defaults.BATCH_CHUNK_SIZE),
            max_batch_ids=_int_env(env, "NETRISK_MAX_BATCH_IDS", defaults.MAX_BATCH_IDS),
        )
