from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging
import os

from dotenv import load_dotenv

from .dates import DEFAULT_TIMEZONE
from .natgeo import DEFAULT_BATCH_DEADLINE, LATEST_STORIES_URL
from .vk_api import DEFAULT_VERSION

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; falling back to %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive %s=%r; falling back to %s", name, raw, default)
        return default
    return value


def _env_int(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; ignoring it", name, raw)
        return None
    return value if value > 0 else None


@dataclass
class Settings:
    http_timeout: float = 10.0
    batch_deadline: float = DEFAULT_BATCH_DEADLINE
    max_workers: Optional[int] = None
    timezone: str = DEFAULT_TIMEZONE
    natgeo_url: str = LATEST_STORIES_URL
    vk_access_token: Optional[str] = None
    vk_api_version: str = DEFAULT_VERSION

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        """Read settings from the environment, loading a ``.env`` file first unless disabled."""
        if dotenv:
            load_dotenv()
        return cls(
            http_timeout=_env_float("RSS_MAKER_HTTP_TIMEOUT", cls.http_timeout),
            batch_deadline=_env_float("RSS_MAKER_BATCH_DEADLINE", cls.batch_deadline),
            max_workers=_env_int("RSS_MAKER_MAX_WORKERS"),
            timezone=(os.getenv("RSS_MAKER_TIMEZONE") or "").strip() or DEFAULT_TIMEZONE,
            natgeo_url=(os.getenv("NATGEO_LATEST_URL") or "").strip() or LATEST_STORIES_URL,
            vk_access_token=os.getenv("VK_ACCESS_TOKEN") or None,
            vk_api_version=(os.getenv("VK_API_VERSION") or "").strip() or DEFAULT_VERSION,
        )
