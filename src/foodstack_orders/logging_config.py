"""
Logging setup shared by the HTTP app, the CLI and the tests.

Every module asks for its logger through ``get_logger(__name__)``; the
handlers and format are installed once by ``setup_logging``.
"""

from __future__ import annotations

import logging
import sys
from typing import List, TextIO

LOG_FORMAT = "%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s"

# third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("uvicorn.access", "httpx")


def setup_logging(
    level: str = "INFO", log_file: str | None = None, stream: TextIO | None = None
) -> None:
    """
    Configures the root logger.

    Console output goes to ``stream`` (stdout by default). When ``log_file`` is
    given, the same records are also appended to that file.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
