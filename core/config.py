"""
Runtime configuration for the catalog core and API.

Settings are read from the environment (prefix ``CATALOG_``) or a local
``.env`` file. Everything else here is a plain constant and should be
imported where needed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SPREADSHEET_ID = "1ZDO0G2YTgxcXrK-Zw4sBofPXtcdsvirrSs4fKdnZIQI"
GVIZ_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/gviz/tq?tqx=out:json&gid={gid}"

SEARCH_DEBOUNCE_SECONDS = 0.25
FALLBACK_ADVISORY = "Failed to load sheet data. Using fallback dataset."


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    spreadsheet_id: str = DEFAULT_SPREADSHEET_ID
    sheet_gid: int = 0
    source_file: Optional[Path] = None

    cache_dir: Path = PROJECT_ROOT / ".catalog_cache"
    cache_ttl_seconds: float = 60 * 60

    request_timeout: float = 15.0
    log_level: str = "INFO"


settings = Settings()


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
