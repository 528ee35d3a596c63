"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_API_BASE_URL = "http://localhost:5000/api"
DEFAULT_CORS_ORIGINS = "http://localhost:5173"


def _split(value: str) -> tuple[str, ...]:
    return tuple(v.strip() for v in value.split(",") if v.strip())


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout: float = 30.0
    drag_debounce_ms: int = 500
    cors_origins: tuple[str, ...] = field(default_factory=lambda: _split(DEFAULT_CORS_ORIGINS))

    @property
    def drag_debounce_seconds(self) -> float:
        return self.drag_debounce_ms / 1000.0


def get_settings() -> Settings:
    """Build settings from ``NAVROUTE_*`` and ``CORS_ORIGINS`` variables."""
    return Settings(
        api_base_url=os.environ.get("NAVROUTE_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        http_timeout=float(os.environ.get("NAVROUTE_HTTP_TIMEOUT", "30")),
        drag_debounce_ms=int(os.environ.get("NAVROUTE_DRAG_DEBOUNCE_MS", "500")),
        cors_origins=_split(os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
    )
