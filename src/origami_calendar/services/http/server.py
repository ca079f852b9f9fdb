from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from ...bootstrap import configure_logging
from ...domain import ErrorEnvelope, SearchRequest
from ..proxy import ProxyForwarder

PROXY_PATH = "/api/proxy"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Origami Calendar Proxy", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

_forwarder: Optional[ProxyForwarder] = None


def get_forwarder() -> ProxyForwarder:
    global _forwarder
    if _forwarder is None:
        _forwarder = ProxyForwarder()
    return _forwarder


def _envelope(payload: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers={"Access-Control-Allow-Origin": "*"})


@app.options(PROXY_PATH)
async def proxy_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post(PROXY_PATH)
async def proxy_search(request: Request, forwarder: ProxyForwarder = Depends(get_forwarder)) -> JSONResponse:
    try:
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError(f"Expected a JSON object, got {type(body).__name__}")
        search = SearchRequest.model_validate(body)
    except (ValueError, ValidationError) as exc:
        logger.warning("Rejected proxy body: %s", exc)
        return _envelope(ErrorEnvelope(error="Invalid Request", details=str(exc)).to_payload())

    payload = await forwarder.forward(search)
    if "error" in payload:
        logger.info("Proxy returned %s", payload["error"])
    return _envelope(payload)


@app.api_route(PROXY_PATH, methods=["GET", "PUT", "PATCH", "DELETE"])
async def proxy_method_not_allowed() -> JSONResponse:
    return _envelope(ErrorEnvelope(error="Method Not Allowed").to_payload(), status_code=405)


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    asyncio.run(serve(app, config))
