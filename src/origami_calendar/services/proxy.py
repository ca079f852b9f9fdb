from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
import orjson

from ..config import AppSettings, get_settings
from ..domain import ErrorEnvelope, SearchRequest
from ..i18n import message

logger = logging.getLogger(__name__)

BODY_PREVIEW_LENGTH = 200
HTML_MARKERS = ("<html", "<!doctype html")


def normalize_base_url(base_url: str) -> str:
    return base_url.strip().rstrip("/")


def search_url(base_url: str, collection_id: str) -> str:
    return f"{normalize_base_url(base_url)}/space/{collection_id.strip()}/search"


def looks_like_markup(text: str) -> bool:
    return text.strip().lower().startswith(HTML_MARKERS)


def _preview(text: str) -> str:
    return text[:BODY_PREVIEW_LENGTH]


def _backend_message(parsed: Any, raw: str) -> str:
    if isinstance(parsed, dict):
        for key in ("message", "error", "detail"):
            value = parsed.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return raw


@dataclass(slots=True)
class ProxyForwarder:
    """Forwards search requests to Origami with the server-side credential.

    Every outcome is returned as a JSON-ready dict. Failures carry an ``error``
    key and never raise, so callers decode a single shape.
    """

    settings: AppSettings = field(default_factory=get_settings)
    client: Optional[httpx.AsyncClient] = None
    credential: Optional[str] = None
    locale: Optional[str] = None

    def __post_init__(self) -> None:
        if self.credential is None:
            self.credential = self.settings.origami.api_key
        if self.locale is None:
            self.locale = self.settings.ui.locale

    def _failure(self, error: str, details: Optional[str] = None) -> Dict[str, Any]:
        return ErrorEnvelope(error=error, details=details).to_payload()

    async def forward(self, request: SearchRequest) -> Dict[str, Any]:
        base_url = (request.base_url or self.settings.origami.base_url or "").strip()
        collection_id = (request.collection_id or self.settings.origami.collection_id or "").strip()
        if not base_url or not collection_id:
            return self._failure("Missing Target", "Both a base URL and a collection id are required.")
        if not self.credential:
            logger.error("Refusing to forward: ORIGAMI_API_KEY is not configured")
            return self._failure(
                "Server Misconfiguration",
                "ORIGAMI_API_KEY is not configured on the proxy server.",
            )

        target = search_url(base_url, collection_id)
        payload = {**request.filters, "limit": self.settings.origami.page_limit}
        headers = {
            "Authorization": f"Bearer {self.credential}",
            "Content-Type": "application/json",
        }

        logger.info("Proxying search to %s", target)
        try:
            response = await self._post(target, headers=headers, content=orjson.dumps(payload))
        except httpx.TimeoutException as exc:
            logger.warning("Search to %s timed out: %s", target, exc)
            return self._failure("Proxy Timeout", str(exc) or exc.__class__.__name__)
        except httpx.HTTPError as exc:
            logger.warning("Search to %s failed: %s", target, exc)
            return self._failure("Proxy Fatal Error", str(exc) or exc.__class__.__name__)

        return self._normalize(response)

    async def _post(self, url: str, *, headers: Dict[str, str], content: bytes) -> httpx.Response:
        timeout = self.settings.proxy.timeout
        if self.client is not None:
            return await self.client.post(url, headers=headers, content=content, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(url, headers=headers, content=content)

    def _normalize(self, response: httpx.Response) -> Dict[str, Any]:
        raw = response.text

        if looks_like_markup(raw):
            logger.warning("Backend answered %s with an HTML page", response.status_code)
            return self._failure("HTML Response", message("html_hint", self.locale))

        try:
            parsed = orjson.loads(raw)
            decoded = True
        except orjson.JSONDecodeError:
            parsed, decoded = None, False

        if not response.is_success:
            logger.warning("Backend answered %s", response.status_code)
            return self._failure(f"Backend Error ({response.status_code})", _backend_message(parsed, raw))

        if not decoded:
            logger.warning("Backend answered %s with a non-JSON body", response.status_code)
            return self._failure("Invalid Response", _preview(raw))
        if isinstance(parsed, list):
            return {"items": parsed}
        if not isinstance(parsed, dict):
            return self._failure("Invalid Response", _preview(raw))
        return parsed
