"""Logging setup shared by the web app and the asset CLI."""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict

from app.core.config import Settings, resolve_path


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    }
    if settings.logging.file is not None:
        log_file = resolve_path(settings.logging.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "filename": str(log_file),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": settings.logging.format},
        },
        "handlers": handlers,
        "loggers": {
            "app": {
                "level": settings.logging.level.upper(),
                "handlers": list(handlers),
                "propagate": True,
            },
        },
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).debug(
        "Logging configured (level=%s, file=%s)", settings.logging.level, settings.logging.file
    )
