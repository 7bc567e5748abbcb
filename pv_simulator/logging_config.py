"""Logging setup with optional structured JSON output."""

import json
import logging
from typing import Any, Dict, Optional

from config.config import APP_CONFIG


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ("modelo", "referencia", "duration_ms"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val

        return json.dumps(log_entry)


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level name; defaults to APP_CONFIG["log_level"]
        json_format: Emit JSON records; defaults to APP_CONFIG["log_json"]
    """
    if level is None:
        level = APP_CONFIG["log_level"]
    if json_format is None:
        json_format = APP_CONFIG["log_json"]

    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()
    root.addHandler(handler)
