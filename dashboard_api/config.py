from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Checked in order, first non-empty value wins.
DATABASE_URL_VARS = ("POSTGRES_URL", "DATABASE_URL")


@dataclass(frozen=True)
class Settings:
    # Unset means fallback mode: reads come from the placeholder data and
    # invoice mutations are skipped.
    database_url: Optional[str]

    # Artificial delay before the live revenue query, used to demo loading states.
    revenue_delay_seconds: float

    api_host: str
    api_port: int
    log_level: str

    # Rendered list views. No directory means a private temp dir per process.
    view_cache_dir: Optional[str] = None
    view_cache_ttl_seconds: float = 30.0
    view_cache_max_entries: int = 256

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url)


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def get_database_url() -> Optional[str]:
    for name in DATABASE_URL_VARS:
        value = _getenv(name)
        if value:
            return value
    return None


def get_settings() -> Settings:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev), real environment variables win
    """
    load_dotenv(override=False)

    return Settings(
        database_url=get_database_url(),
        revenue_delay_seconds=float(_getenv("REVENUE_FETCH_DELAY_SECONDS", "0") or "0"),
        api_host=_getenv("API_HOST", "0.0.0.0") or "0.0.0.0",
        api_port=int(_getenv("API_PORT", "8000") or "8000"),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        view_cache_dir=_getenv("VIEW_CACHE_DIR"),
        view_cache_ttl_seconds=float(_getenv("VIEW_CACHE_TTL_SECONDS", "30") or "30"),
        view_cache_max_entries=int(_getenv("VIEW_CACHE_MAX_ENTRIES", "256") or "256"),
    )
