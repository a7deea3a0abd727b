"""HTTP transport used by the pairing client."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from ..errors import TransportError

logger = logging.getLogger(__name__)

_BODY_PREVIEW = 200


class HttpTransport(Protocol):
    """Issues one JSON request and returns the raw response body."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        token: str,
        expected_status: int,
        json: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        ...


class HttpxTransport:
    """``HttpTransport`` backed by ``httpx.AsyncClient``.

    An injected client is used as is and left open by :meth:`aclose`; a client
    created here is owned and closed by this transport.
    """

    def __init__(
        self,
        *,
        timeout: float = 15.0,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if user_agent:
            headers["User-Agent"] = user_agent
        self._headers = headers
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: str,
        url: str,
        *,
        token: str,
        expected_status: int,
        json: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        headers = dict(self._headers)
        headers["Authorization"] = f"Bearer {token}"
        try:
            resp = await self._client.request(method, url, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransportError(
                f"{method} {url} failed: {exc}",
                method=method,
                url=url,
            ) from exc

        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if resp.status_code != expected_status:
            body = resp.text[:_BODY_PREVIEW]
            raise TransportError(
                f"{method} {url} returned HTTP {resp.status_code}, expected {expected_status}",
                method=method,
                url=url,
                status_code=resp.status_code,
                body=body,
            )
        return resp.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["HttpTransport", "HttpxTransport"]
