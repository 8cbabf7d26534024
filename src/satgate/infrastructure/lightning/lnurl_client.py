"""LNURL-pay client (LUD-06 and LUD-16)."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import httpx

from ...domain.lightning.entities import InvoiceResponse, PayResponse
from ..http.http_client import AsyncHttpClient


def build_invoice_url(callback: str, amount_msat: int, comment: str) -> str:
    """Append the LNURL-pay query parameters to ``callback``.

    The comment is percent-escaped (spaces become ``%20``).
    """
    separator = "&" if "?" in callback else "?"
    return (
        f"{callback}{separator}amount={amount_msat}"
        f"&comment={quote(comment, safe='')}"
    )


class LnurlPayClient:
    """Fetches LNURL-pay parameters and invoices, validated into domain models.

    Transport errors and non-2xx statuses propagate as httpx exceptions;
    malformed bodies raise ``ValueError``.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(timeout=timeout, transport=transport)

    async def fetch_pay_response(self, url: str) -> PayResponse:
        return PayResponse.model_validate(await self._http.get_json(url))

    async def fetch_invoice(
        self, callback: str, amount_msat: int, comment: str
    ) -> InvoiceResponse:
        url = build_invoice_url(callback, amount_msat, comment)
        return InvoiceResponse.model_validate(await self._http.get_json(url))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "LnurlPayClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
