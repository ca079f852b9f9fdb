from __future__ import annotations

from enum import Enum


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class NavigationDirection(int, Enum):
    PREVIOUS = -1
    NEXT = 1


class ControllerState(str, Enum):
    UNCONFIGURED = "unconfigured"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
