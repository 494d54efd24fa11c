"""Process-wide default timezone."""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

_current: ZoneInfo | None = None


def set_default_timezone(name: str) -> ZoneInfo:
    """Fix the process timezone; raises ZoneInfoNotFoundError for unknown names."""
    global _current
    zone = ZoneInfo(name)
    if _current is not None and _current.key == zone.key:
        return _current

    os.environ["TZ"] = zone.key
    if hasattr(time, "tzset"):
        time.tzset()
    _current = zone
    logger.info("Default timezone set to %s", zone.key)
    return zone


def get_default_timezone() -> ZoneInfo | None:
    return _current


def now() -> datetime:
    return datetime.now(_current) if _current is not None else datetime.now().astimezone()
