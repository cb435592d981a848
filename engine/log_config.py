"""engine.log_config

Logging configuration through dictConfig: console handler plus an optional
rotating file handler.
"""

from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from pathlib import Path
from typing import Dict, Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-7s | %(parent_file)s:%(lineno)-3d | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_configured = False


class ShortPathFilter(logging.Filter):
    """Attach `parent_file` = '<parent>/<filename>' to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        parent = os.path.basename(os.path.dirname(record.pathname))
        filename = os.path.basename(record.pathname)
        record.parent_file = f"{parent}/{filename}"
        return True


def configure_logging(
    *,
    level: str = "INFO",
    log_dir: str = "logs",
    log_filename: Optional[str] = None,
    max_bytes: int = 1 * 1024 * 1024,
    backup_count: int = 5,
    force: bool = False,
) -> logging.Logger:
    """Configure root logging once per process (Streamlit reruns call this every time)."""
    global _configured
    logger = logging.getLogger("city_guesser")
    if _configured and not force:
        return logger

    level_no = getattr(logging, str(level or "INFO").upper(), logging.INFO)

    handlers: Dict[str, Dict[str, object]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "level": level_no,
            "filters": ["short_path"],
        }
    }
    if log_filename:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "level": level_no,
            "filename": os.path.join(log_dir, str(Path(log_filename).with_suffix(".log"))),
            "maxBytes": max_bytes,
            "backupCount": backup_count,
            "encoding": "utf-8",
            "filters": ["short_path"],
        }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"short_path": {"()": ShortPathFilter}},
            "formatters": {"default": {"format": DEFAULT_FORMAT, "datefmt": DEFAULT_DATEFMT}},
            "handlers": handlers,
            "root": {"handlers": list(handlers.keys()), "level": level_no},
            "loggers": {
                # SDK request logs are noisy at INFO
                "httpx": {"level": "WARNING"},
                "google_genai": {"level": "WARNING"},
            },
        }
    )

    _configured = True
    logger.debug("Logging configured for level %s", logging.getLevelName(level_no))
    return logger
