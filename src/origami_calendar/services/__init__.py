"""Application services: forwarding, normalization and calendar state."""

from __future__ import annotations

from .controller import CalendarController
from .gateway import InProcessGateway, RemoteProxyClient, SearchGateway
from .mapper import classify_error, map_to_events, to_fetch_result
from .proxy import ProxyForwarder

__all__ = [
    "CalendarController",
    "InProcessGateway",
    "ProxyForwarder",
    "RemoteProxyClient",
    "SearchGateway",
    "classify_error",
    "map_to_events",
    "to_fetch_result",
]
