"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv(".env.local")


DEFAULT_LMS_API_BASE_URL = "https://learning-management-system-a258.onrender.com/api/v1"
DEFAULT_FALLBACK_BASE_URL = "http://localhost"
# Office Online viewer; the raw document URL is appended URL-encoded.
DEFAULT_DOCUMENT_VIEWER_URL = "https://view.officeapps.live.com/op/embed.aspx?src="


@dataclass(frozen=True)
class Settings:
    """Explicit configuration passed to the classifier, renderer and API client."""

    lms_api_base_url: str = DEFAULT_LMS_API_BASE_URL
    fallback_base_url: str = DEFAULT_FALLBACK_BASE_URL
    document_viewer_url: str = DEFAULT_DOCUMENT_VIEWER_URL
    extra_blocked_hosts: tuple[str, ...] = field(default_factory=tuple)
    http_timeout: float = 30.0
    sentry_dsn: str | None = None
    frontend_url: str = "http://localhost:5173"
    # Viewer sessions idle longer than this (seconds) are closed.
    viewer_idle_timeout: float = 1800.0
    max_viewers: int = 1000
    log_level: str = "INFO"


def _split_hosts(raw: str) -> tuple[str, ...]:
    return tuple(h.strip().lower() for h in raw.split(",") if h.strip())


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        lms_api_base_url=os.environ.get("LMS_API_BASE_URL", DEFAULT_LMS_API_BASE_URL).rstrip("/"),
        fallback_base_url=os.environ.get("FALLBACK_BASE_URL", DEFAULT_FALLBACK_BASE_URL),
        document_viewer_url=os.environ.get("DOCUMENT_VIEWER_URL", DEFAULT_DOCUMENT_VIEWER_URL),
        extra_blocked_hosts=_split_hosts(os.environ.get("BLOCKED_HOSTS", "")),
        http_timeout=float(os.environ.get("LMS_HTTP_TIMEOUT", "30")),
        sentry_dsn=os.environ.get("SENTRY_DSN") or None,
        frontend_url=os.environ.get("FRONTEND_URL", "http://localhost:5173").rstrip("/"),
        viewer_idle_timeout=float(os.environ.get("VIEWER_IDLE_TIMEOUT", "1800")),
        max_viewers=int(os.environ.get("MAX_VIEWER_SESSIONS", "1000")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()