"""Time-grid layout for the day, week and month views."""

from __future__ import annotations

from .grid import (
    DAY_MINUTES,
    HOUR_HEIGHT,
    DayColumn,
    GridBucket,
    MonthCell,
    PlacedEvent,
    Placement,
    ViewLayout,
    advance,
    bucket_for_view,
    current_time_offset,
    events_on,
    header_title,
    layout_view,
    place_event,
    start_of_week,
)

__all__ = [
    "DAY_MINUTES",
    "HOUR_HEIGHT",
    "DayColumn",
    "GridBucket",
    "MonthCell",
    "PlacedEvent",
    "Placement",
    "ViewLayout",
    "advance",
    "bucket_for_view",
    "current_time_offset",
    "events_on",
    "header_title",
    "layout_view",
    "place_event",
    "start_of_week",
]
