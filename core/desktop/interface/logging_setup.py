"""Logging configuration for the CLI and TUI.

The TUI owns the terminal, so records go to a file; the console only sees
warnings when running plain CLI commands.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from config import get_log_settings

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleFilter(logging.Filter):
    """Own loggers at WARNING+, third-party and py.warnings at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("task_item"):
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def configure_logging(
    *,
    console: bool = True,
    log_file: Optional[Path] = None,
    level: Optional[int] = None,
) -> Path:
    """Install file (and optionally console) handlers on the root logger.

    Call once, early. Returns the log file path in use.
    """
    default_file, default_level = get_log_settings()
    log_file = Path(log_file) if log_file else default_file
    level = default_level if level is None else level
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(logging.WARNING)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleFilter())
        root.addHandler(ch)

    logging.captureWarnings(True)
    return log_file


__all__ = ["configure_logging", "LOG_FORMAT"]
