"""File logging for the denial classifier; console output lives in utils.console.

One log file per run ({LOG_DIR}/{name}_YYYYmmdd_HHMMSS.log), with LOG_DIR and
LOG_LEVEL read from the environment.
"""
from __future__ import annotations

import datetime
import logging
import os
from pathlib import Path
from typing import Optional

_INITIALIZED = False
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
# Updated by init_logging
LOG_FILE: Optional[Path] = None
DEFAULT_FILE_LEVEL = logging.getLevelName(os.getenv("LOG_LEVEL", "DEBUG").upper())
if not isinstance(DEFAULT_FILE_LEVEL, int):
    DEFAULT_FILE_LEVEL = logging.DEBUG

_FILE_FMT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def init_logging(
    name: str = "classifier",
    file_level: int = DEFAULT_FILE_LEVEL,
    log_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Initialize file logging once and return the log file path.

    Safe to call multiple times; later calls return the existing path.
    """
    global _INITIALIZED, LOG_FILE
    if _INITIALIZED:
        return LOG_FILE

    directory = Path(log_dir) if log_dir is not None else LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    LOG_FILE = directory / f"{name}_{timestamp}.log"

    file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(_FILE_FMT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    _INITIALIZED = True
    return LOG_FILE


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name."""
    return logging.getLogger(name)


__all__ = ["init_logging", "get_logger", "LOG_FILE"]
