from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

STORE_BACKENDS = ("file", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    menu_dir: Path
    orders_dir: Path
    store_backend: str = "file"
    log_level: str = "INFO"
    log_file: str | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    root_path: str = ""

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> "Settings":
        """
        Reads ``FOODSTACK_*`` variables. Menu and order directories default to
        ``menu/`` and ``orders/`` under ``FOODSTACK_DATA_DIR`` (``./data``).

        Raises ValueError on an unknown store backend, log level or a bad port.
        """
        env = os.environ if env is None else env
        data_dir = Path(env.get("FOODSTACK_DATA_DIR", "data"))

        store_backend = env.get("FOODSTACK_STORE", "file").strip().lower()
        if store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"FOODSTACK_STORE must be one of {', '.join(STORE_BACKENDS)}: {store_backend!r}"
            )

        log_level = env.get("FOODSTACK_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"FOODSTACK_LOG_LEVEL is not a log level: {log_level!r}")

        raw_port = env.get("FOODSTACK_PORT", "8000")
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"FOODSTACK_PORT must be an integer: {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"FOODSTACK_PORT out of range: {port}")

        return Settings(
            menu_dir=Path(env.get("FOODSTACK_MENU_DIR") or data_dir / "menu"),
            orders_dir=Path(env.get("FOODSTACK_ORDERS_DIR") or data_dir / "orders"),
            store_backend=store_backend,
            log_level=log_level,
            log_file=env.get("FOODSTACK_LOG_FILE") or None,
            host=env.get("FOODSTACK_HOST", "0.0.0.0"),
            port=port,
            root_path=env.get("FOODSTACK_ROOT_PATH", "").rstrip("/"),
        )
