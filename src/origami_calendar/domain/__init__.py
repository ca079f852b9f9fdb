"""Domain models for the calendar views and the search proxy."""

from __future__ import annotations

from .enums import ControllerState, NavigationDirection, ViewMode
from .models import (
    CalendarEvent,
    Configuration,
    ErrorEnvelope,
    FetchResult,
    RawRecord,
    Scalar,
    SearchRequest,
)

__all__ = [
    "CalendarEvent",
    "Configuration",
    "ControllerState",
    "ErrorEnvelope",
    "FetchResult",
    "NavigationDirection",
    "RawRecord",
    "Scalar",
    "SearchRequest",
    "ViewMode",
]
