from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Origami Calendar"
APP_AUTHOR = "OrigamiCalendar"
DATA_DIR = Path(os.getenv("ORIGAMI_CALENDAR_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))

DEFAULT_BASE_URL = "https://razerstar.origami.ms/api/v1"
DEFAULT_COLLECTION_ID = "e_90"
DEFAULT_PAGE_LIMIT = 1000


@dataclass(frozen=True)
class OrigamiSettings:
    base_url: str
    collection_id: str
    api_key: Optional[str]
    page_limit: int

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.collection_id and self.api_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.base_url:
            missing.append("ORIGAMI_BASE_URL")
        if not self.collection_id:
            missing.append("ORIGAMI_COLLECTION_ID")
        if not self.api_key:
            missing.append("ORIGAMI_API_KEY")
        return missing


@dataclass(frozen=True)
class ProxySettings:
    host: str
    port: int
    timeout: float
    proxy_url: Optional[str]


@dataclass(frozen=True)
class UiSettings:
    locale: str
    default_view: str
    demo_fallback: bool


@dataclass(frozen=True)
class AppSettings:
    origami: OrigamiSettings
    proxy: ProxySettings
    ui: UiSettings


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _flag_from_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    origami = OrigamiSettings(
        base_url=os.getenv("ORIGAMI_BASE_URL", DEFAULT_BASE_URL),
        collection_id=os.getenv("ORIGAMI_COLLECTION_ID", DEFAULT_COLLECTION_ID),
        api_key=os.getenv("ORIGAMI_API_KEY") or None,
        page_limit=DEFAULT_PAGE_LIMIT,
    )

    proxy = ProxySettings(
        host=os.getenv("ORIGAMI_PROXY_HOST", "127.0.0.1"),
        port=_int_from_env("ORIGAMI_PROXY_PORT", 8000),
        timeout=_float_from_env("ORIGAMI_PROXY_TIMEOUT", 15.0),
        proxy_url=os.getenv("ORIGAMI_PROXY_URL") or None,
    )

    ui = UiSettings(
        locale=os.getenv("ORIGAMI_CALENDAR_LOCALE", "he"),
        default_view=os.getenv("ORIGAMI_CALENDAR_VIEW", "week"),
        demo_fallback=_flag_from_env("ORIGAMI_DEMO_FALLBACK"),
    )

    return AppSettings(origami=origami, proxy=proxy, ui=ui)
