from __future__ import annotations

import sys

import uvicorn

from foodstack_orders.adapters.inbound.cli import USAGE, run_cli
from foodstack_orders.bootstrap import build_usecases
from foodstack_orders.logging_config import setup_logging
from foodstack_orders.settings import Settings


def serve(settings: Settings) -> None:
    uvicorn.run(
        "foodstack_orders.bootstrap:create_asgi_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
    )


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(USAGE)
        return 2

    settings = Settings.from_env()
    if argv == ["serve"]:
        serve(settings)
        return 0

    # stdout carries the JSON result
    setup_logging(settings.log_level, settings.log_file, stream=sys.stderr)
    usecases = build_usecases(settings)
    return run_cli(usecases.place_order, usecases.get_order, argv)


if __name__ == "__main__":
    raise SystemExit(main())
