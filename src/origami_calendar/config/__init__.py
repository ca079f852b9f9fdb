"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, OrigamiSettings, ProxySettings, UiSettings, get_settings
from .store import ConfigStore

__all__ = ["AppSettings", "ConfigStore", "OrigamiSettings", "ProxySettings", "UiSettings", "get_settings"]
