"""Outbound JSON fetching over httpx."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type
from types import TracebackType

import httpx

USER_AGENT = "satgate/1.0"


class AsyncHttpClient:
    """Asynchronous client for third-party JSON endpoints.

    Redirects are followed, a non-2xx status raises ``httpx.HTTPStatusError``
    and a body that is not a JSON object raises ``ValueError``.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )

    async def get_json(self, url: str) -> Dict[str, Any]:
        resp = await self._client.get(url)
        resp.raise_for_status()
        body = resp.json()
        if not isinstance(body, dict):
            raise ValueError(f"Expected a JSON object from {url}")
        return body

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
