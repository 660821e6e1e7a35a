"""Centralised logging configuration for the TFT winning comps collector."""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Dict

from core.utils.env import get_bool_env, get_env

_LOGGING_CONFIGURED = False

_NOISY_LOGGERS = (
    # HTTP clients
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
    "httpx",
    # Database
    "asyncpg",
    "aiosqlite",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
)


class _NoMetricEventsFilter(logging.Filter):
    """Keep raw metric events off the console unless debugging."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.name == "observability.metrics" and record.levelno < logging.INFO)


def _resolve_level(value: str | None, default: str) -> str:
    value = (value or "").strip().upper()
    if value and isinstance(getattr(logging, value, None), int):
        return value
    return default


def setup_logging(force: bool = False) -> None:
    """Configure the root logger for console and optional file output."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED and not force:
        return

    log_level = _resolve_level(get_env("TFT_LOG_LEVEL", default="INFO"), "INFO")
    console_level = _resolve_level(get_env("TFT_LOG_CONSOLE_LEVEL", default=log_level), log_level)
    file_level = _resolve_level(get_env("TFT_LOG_FILE_LEVEL", default=log_level), log_level)

    handlers: Dict[str, object] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": console_level,
            "formatter": "standard",
            "filters": ["no_metric_events"],
            "stream": "ext://sys.stdout",
        },
    }
    root_handlers = ["console"]

    log_dir_value = get_env("TFT_LOG_DIR")
    if log_dir_value:
        log_dir = Path(log_dir_value)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / (get_env("TFT_LOG_FILE", default="collector.log") or "collector.log")
        handlers["file"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": file_level,
            "formatter": "standard",
            "filename": str(log_file),
            "when": "midnight",
            "backupCount": int(get_env("TFT_LOG_RETENTION", default="7") or "7"),
            "encoding": "utf-8",
        }
        root_handlers.append("file")

    if get_bool_env("TFT_LOG_TIME_MS", False):
        fmt = "%(asctime)s.%(msecs)03d %(levelname)s [%(name)s] - %(message)s"
    else:
        fmt = "%(asctime)s %(levelname)s [%(name)s] - %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    config: Dict[str, object] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "no_metric_events": {"()": _NoMetricEventsFilter},
        },
        "formatters": {
            "standard": {
                "format": fmt,
                "datefmt": datefmt,
            },
        },
        "handlers": handlers,
        "root": {
            "level": log_level,
            "handlers": root_handlers,
        },
    }

    logging.config.dictConfig(config)
    logging.captureWarnings(True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True


__all__ = ["setup_logging"]
