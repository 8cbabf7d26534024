"""Protocol interfaces for the outbound Lightning collaborators.

Services accept any implementation satisfying these contracts, which keeps
them testable without network access or real invoices.
"""

from __future__ import annotations

from typing import Protocol

from ..lightning.entities import Invoice, InvoiceResponse, PayResponse


class LnurlClientProtocol(Protocol):
    """Contract for fetching LNURL-pay documents."""

    async def fetch_pay_response(self, url: str) -> PayResponse:
        """Fetch and parse the LNURL-pay parameters at ``url``.

        Raises:
            httpx.RequestError: the endpoint could not be reached
            httpx.HTTPStatusError: the endpoint answered with a non-2xx status
            ValueError: the body is not valid LNURL-pay JSON
        """
        ...

    async def fetch_invoice(
        self, callback: str, amount_msat: int, comment: str
    ) -> InvoiceResponse:
        """Ask ``callback`` for an invoice of ``amount_msat``.

        Raises the same errors as ``fetch_pay_response``.
        """
        ...


class InvoiceDecoderProtocol(Protocol):
    """Contract for turning a BOLT11 string into an ``Invoice``."""

    def decode(self, encoded: str) -> Invoice:
        """Decode ``encoded``.

        Raises:
            DecodeFailedError: malformed invoice or unexpected network
        """
        ...
