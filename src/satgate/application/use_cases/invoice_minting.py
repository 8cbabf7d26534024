"""Invoice minting for protected assets.

This is the callback a payment-challenge middleware invokes when a request
for a protected asset carries no proof of payment. The flow is linear and
stops at the first failure:

1. look up the asset record
2. resolve the owner's Lightning address
3. request an invoice for the asset price
4. decode the invoice to obtain its payment hash
5. remember which asset the payment hash unlocks

Nothing is retried and the asset record is never modified. A proof of
payment is only honoured for a hash bound in step 5.
"""

from __future__ import annotations

import logging

import httpx

from ...domain.assets.asset_repository import AssetRepository
from ...domain.errors import (
    AmountOutOfRangeError,
    AssetNotFoundError,
    InvoiceRequestFailedError,
)
from ...domain.lightning.challenge_repository import ChallengeRepository
from ...domain.lightning.entities import Invoice, PayResponse
from ...domain.shared import InvoiceDecoderProtocol, LnurlClientProtocol
from .address_resolver import LightningAddressResolver

logger = logging.getLogger(__name__)

ASSET_PATH_PREFIX = "/assets/"


def invoice_comment(identifier: str) -> str:
    return f"LSAT invoice for file {identifier}"


class InvoiceMintingService:
    """Service producing a payable invoice for a protected asset."""

    def __init__(
        self,
        asset_repository: AssetRepository,
        resolver: LightningAddressResolver,
        lnurl_client: LnurlClientProtocol,
        decoder: InvoiceDecoderProtocol,
        challenge_repository: ChallengeRepository,
        *,
        enforce_sendable_bounds: bool = True,
    ):
        self.asset_repository = asset_repository
        self.resolver = resolver
        self.lnurl_client = lnurl_client
        self.decoder = decoder
        self.challenge_repository = challenge_repository
        self.enforce_sendable_bounds = enforce_sendable_bounds

    async def add_invoice(self, resource_path: str) -> Invoice:
        """Mint an invoice for the asset addressed by ``resource_path``."""
        identifier = resource_path
        if identifier.startswith(ASSET_PATH_PREFIX):
            identifier = identifier[len(ASSET_PATH_PREFIX) :]
        if not identifier:
            raise AssetNotFoundError("no filename specified")
        return await self.mint_invoice(identifier)

    async def mint_invoice(self, identifier: str) -> Invoice:
        record = await self.asset_repository.get_by_identifier(identifier)
        if not record:
            raise AssetNotFoundError(f"Asset {identifier} not found")

        pay_response = await self.resolver.resolve(record.payment_address)

        amount_msat = record.price_msat
        self._check_sendable(pay_response, amount_msat)

        encoded = await self._request_invoice(
            pay_response.callback, amount_msat, invoice_comment(identifier)
        )
        invoice = self.decoder.decode(encoded)
        if not await self.challenge_repository.bind(invoice.payment_hash, identifier):
            raise InvoiceRequestFailedError(
                f"Payment hash {invoice.payment_hash_hex} was already issued "
                "for another asset"
            )

        logger.info(
            "Minted invoice for %s: %d msat, payment hash %s",
            identifier,
            amount_msat,
            invoice.payment_hash_hex,
        )
        return invoice

    def _check_sendable(self, pay_response: PayResponse, amount_msat: int) -> None:
        if not self.enforce_sendable_bounds or pay_response.accepts(amount_msat):
            return
        raise AmountOutOfRangeError(
            f"Amount {amount_msat} msat is outside the sendable range "
            f"[{pay_response.min_sendable}, {pay_response.max_sendable}]"
        )

    async def _request_invoice(
        self, callback: str, amount_msat: int, comment: str
    ) -> str:
        try:
            response = await self.lnurl_client.fetch_invoice(
                callback, amount_msat, comment
            )
        except httpx.HTTPError as e:
            raise InvoiceRequestFailedError(f"Could not reach {callback}: {e}") from e
        except ValueError as e:
            raise InvoiceRequestFailedError(
                f"Malformed invoice response from {callback}: {e}"
            ) from e

        if not response.pr:
            reason = response.reason or "response carries no invoice"
            raise InvoiceRequestFailedError(f"Invoice request failed: {reason}")
        return response.pr
