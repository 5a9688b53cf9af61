"""
Root logger setup.
"""

from __future__ import annotations

import logging
import os


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO"


def setup_logging(level: str | None = None) -> None:
    """
    Attach a console handler to the root logger, once per process.
    """
    root = logging.getLogger()
    if root.handlers:
        return None

    root.setLevel(getattr(logging, (level or log_level()).upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
