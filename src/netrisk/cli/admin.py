"""CLI commands: server administration."""

from __future__ import annotations

import argparse


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from netrisk.adapters.store_factory import create_store
    from netrisk.api import create_app
    from netrisk.observability import setup_tracing

    setup_tracing()
    store = create_store(backend=args.backend, db_path=args.db)
    try:
        uvicorn.run(create_app(store=store), host=args.host, port=args.port, log_config=None)
    finally:
        store.close()
    return 0
