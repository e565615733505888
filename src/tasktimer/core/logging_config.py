"""Logging configuration for tasktimer.

Logs go to a file because the timer owns the whole terminal while a sitting
runs; anything written to stdout or stderr would corrupt the display.
"""

import logging
import os
from pathlib import Path

SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
)

LOG_LEVEL_ENV = "TASKTIMER_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"


def setup_logging(log_path: Path, level: str | None = None) -> None:
    """Configure logging for the whole application.

    Args:
        log_path: File to append log records to.
        level: Log level override. If not provided, uses TASKTIMER_LOG_LEVEL or INFO.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    fmt = DETAILED_FORMAT if log_level == logging.DEBUG else SIMPLE_FORMAT

    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=log_level,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=log_path,
        encoding="utf-8",
        force=True,
    )

    # textual and asyncio are chatty at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("textual").setLevel(logging.WARNING)
