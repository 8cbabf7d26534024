"""Fake LNURL endpoints and invoice decoding for unit tests."""

from __future__ import annotations

import hashlib
from typing import Callable, Union

import httpx

from satgate.domain.errors import DecodeFailedError
from satgate.domain.lightning.entities import Invoice

Route = Union[dict, httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


def make_invoice(encoded: str = "lnbc5u1ptestinvoice") -> Invoice:
    """Invoice whose payment hash is derived from its encoding."""
    return Invoice(payment_hash=hashlib.sha256(encoded.encode()).digest(), encoded=encoded)


class FakeInvoiceDecoder:
    """Decoder accepting any ``lnbc`` string; anything else is malformed."""

    def __init__(self) -> None:
        self.decoded: list[str] = []

    def decode(self, encoded: str) -> Invoice:
        self.decoded.append(encoded)
        if not encoded.startswith("lnbc"):
            raise DecodeFailedError(f"Malformed invoice: {encoded!r}")
        return make_invoice(encoded)


class LnurlServer:
    """Routes full URLs to canned responses and records every request.

    A route value may be a JSON-able dict (served with 200), an
    ``httpx.Response``, an exception to raise, or a handler callable. Unknown
    URLs answer 404.
    """

    def __init__(self, routes: dict[str, Route] | None = None) -> None:
        self.routes: dict[str, Route] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    @property
    def requested_urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, json={"status": "ERROR", "reason": "not found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        if callable(route):
            return route(request)
        return httpx.Response(200, json=route)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


# Example invoice from BOLT #11 ("Please consider supporting this project"),
# signed for mainnet. It predates payment secrets.
BOLT11_EXAMPLE = (
    "lnbc1pvjluezpp5qqqsyqcyq5rqwzqfqqqsyqcyq5rqwzqfqqqsyqcyq5rqwzqfqypqdpl2pkx2ctnv5"
    "sxxmmwwd5kgetjypeh2ursdae8g6twvus8g6rfwvs8qun0dfjkxaq8rkx3yf5tcsyz3d73gafnh3cax9"
    "rn449d9p5uxz9ezhhypd0elx87sjle52x86fux2ypatgddc6k63n7erqz25le42c4u4ecky03ylcqca784w"
)
BOLT11_EXAMPLE_PAYMENT_HASH = bytes.fromhex(
    "0001020304050607080900010203040506070809000102030405060708090102"
)
