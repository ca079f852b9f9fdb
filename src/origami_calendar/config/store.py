from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import orjson

from ..domain import Configuration
from .settings import DATA_DIR, DEFAULT_BASE_URL, DEFAULT_COLLECTION_ID

logger = logging.getLogger(__name__)

CONFIG_FILE = DATA_DIR / "connection.json"


class ConfigStore:
    """Persists the connection settings entered by the user."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or CONFIG_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Configuration:
        if not self._path.exists():
            return Configuration(base_url=DEFAULT_BASE_URL, collection_id=DEFAULT_COLLECTION_ID)
        raw = self._path.read_bytes()
        if not raw:
            return Configuration(base_url=DEFAULT_BASE_URL, collection_id=DEFAULT_COLLECTION_ID)
        try:
            record = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("Ignoring unreadable connection settings at %s", self._path)
            return Configuration(base_url=DEFAULT_BASE_URL, collection_id=DEFAULT_COLLECTION_ID)
        return Configuration.from_record(record if isinstance(record, dict) else {})

    def save(self, config: Configuration) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = orjson.dumps(config.to_record(), option=orjson.OPT_INDENT_2)
        self._path.write_bytes(payload + b"\n")
        logger.debug("Connection settings written to %s", self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
