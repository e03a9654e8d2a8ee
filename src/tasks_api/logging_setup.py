from __future__ import annotations

import logging
import sys
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging with a single stderr handler.

    uvicorn's loggers propagate here as well, so access and application logs
    share one format. Call this ONCE, before the server starts.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)


def ensure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Apply ``setup_logging`` only when nothing has configured the root logger.

    Covers ``uvicorn tasks_api.main:app``, where uvicorn sets up its own
    loggers but leaves the root logger bare.
    """
    if not logging.getLogger().handlers:
        setup_logging(level)
