from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx
import orjson

from ..domain import Configuration, ErrorEnvelope, SearchRequest
from .proxy import ProxyForwarder

logger = logging.getLogger(__name__)


class SearchGateway(Protocol):
    async def search(self, config: Configuration) -> Dict[str, Any]: ...


def _search_request(config: Configuration) -> SearchRequest:
    return SearchRequest(baseUrl=config.base_url or None, collectionId=config.collection_id or None)


@dataclass(slots=True)
class InProcessGateway:
    """Runs the forwarder in the same process as the controller."""

    forwarder: ProxyForwarder

    async def search(self, config: Configuration) -> Dict[str, Any]:
        return await self.forwarder.forward(_search_request(config))


@dataclass(slots=True)
class RemoteProxyClient:
    """Calls a deployed proxy endpoint. The credential never leaves the server."""

    proxy_url: str
    client: Optional[httpx.AsyncClient] = None
    timeout: float = 15.0

    async def search(self, config: Configuration) -> Dict[str, Any]:
        body = _search_request(config).model_dump(by_alias=True, exclude_none=True)
        try:
            response = await self._post(body)
            payload = orjson.loads(response.content)
        except httpx.TimeoutException as exc:
            logger.warning("Proxy %s timed out: %s", self.proxy_url, exc)
            return ErrorEnvelope(error="Proxy Timeout", details=str(exc) or None).to_payload()
        except (httpx.HTTPError, orjson.JSONDecodeError) as exc:
            logger.warning("Proxy %s unreachable: %s", self.proxy_url, exc)
            return ErrorEnvelope(error="Proxy Unreachable", details=str(exc) or None).to_payload()

        if not isinstance(payload, dict):
            return ErrorEnvelope(error="Proxy Unreachable", details="Unexpected proxy payload").to_payload()
        if not response.is_success and "error" not in payload:
            logger.warning("Proxy %s answered %s", self.proxy_url, response.status_code)
            details = f"HTTP {response.status_code}: {orjson.dumps(payload).decode()[:200]}"
            return ErrorEnvelope(error="Proxy Unreachable", details=details).to_payload()
        return payload

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(self.proxy_url, json=body, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.proxy_url, json=body)
