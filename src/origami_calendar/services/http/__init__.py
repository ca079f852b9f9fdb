"""HTTP surface for the search proxy."""

from .server import app, get_forwarder, proxy_search, run_local_server

__all__ = [
    "app",
    "get_forwarder",
    "proxy_search",
    "run_local_server",
]
