"""
Logging setup for the PyFastScale command line tools.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
commands call ``configure_logging`` once to attach handlers to the root
logger. Records go to stderr and, optionally, to a log file, either as
plain text or as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

_DATEFMT = "%Y-%m-%dT%H:%M:%S"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(
    *,
    level: str = "INFO",
    json_logs: bool = False,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    Attach console (and optionally file) handlers to the root logger.

    Args:
        level: Root log level name
        json_logs: Use JSONFormatter instead of the plain text format
        log_file: Also append records to this file; parent folders are created
    """
    formatter = "json" if json_logs else "plain"
    handlers = {"console": {"class": "logging.StreamHandler", "formatter": formatter}}
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": str(log_path),
            "encoding": "utf-8",
            "formatter": formatter,
        }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                    "datefmt": _DATEFMT,
                },
                "json": {"()": JSONFormatter, "datefmt": _DATEFMT},
            },
            "handlers": handlers,
            "root": {"handlers": list(handlers), "level": level.upper()},
        }
    )
