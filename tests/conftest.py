"""
Pytest configuration and shared fixtures.
"""

import os
import tempfile
from pathlib import Path

import pytest

_SANDBOX = Path(tempfile.mkdtemp(prefix="origami-calendar-tests-"))
os.environ.setdefault("ORIGAMI_CALENDAR_DATA_DIR", str(_SANDBOX))
os.environ.setdefault("ORIGAMI_CALENDAR_LOG_DIR", str(_SANDBOX / "logs"))

from origami_calendar.config import AppSettings, OrigamiSettings, ProxySettings, UiSettings  # noqa: E402


def make_settings(
    *,
    api_key="secret-key",
    base_url="https://acme.origami.ms/api/v1",
    collection_id="e_90",
    locale="en",
    default_view="week",
    demo_fallback=False,
    timeout=15.0,
):
    return AppSettings(
        origami=OrigamiSettings(
            base_url=base_url,
            collection_id=collection_id,
            api_key=api_key,
            page_limit=1000,
        ),
        proxy=ProxySettings(host="127.0.0.1", port=8000, timeout=timeout, proxy_url=None),
        ui=UiSettings(locale=locale, default_view=default_view, demo_fallback=demo_fallback),
    )


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def sample_record():
    """Well-formed Origami record."""
    return {
        "_id": "rec-1",
        "title": "Meeting",
        "fld_1544": "2024-01-01T10:00:00",
        "fld_1545": "2024-01-01T11:00:00",
        "fld_2000": "Room 4",
        "nested": {"ignored": True},
    }


@pytest.fixture
def settings_factory():
    return make_settings
