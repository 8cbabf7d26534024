"""BOLT11 invoice decoding backed by the ``bolt11`` library."""

from __future__ import annotations

import bolt11

from ...domain.errors import DecodeFailedError
from ...domain.lightning.entities import Invoice

MAINNET = "bc"


class Bolt11InvoiceDecoder:
    """Decode BOLT11 strings issued for one expected network.

    ``network`` is the currency prefix of the human readable part: ``bc`` for
    mainnet, ``tb`` for testnet, ``bcrt`` for regtest.
    """

    def __init__(self, network: str = MAINNET) -> None:
        self.network = network

    def decode(self, encoded: str) -> Invoice:
        try:
            # Checksum and signature are still verified. validate() is skipped
            # because it demands tags (payment secret, description) that older
            # wallets omit and that only the payer needs.
            decoded = bolt11.decode(encoded.strip(), ignore_exceptions=True)
        except Exception as e:
            # bolt11 reports bad checksums, prefixes and tags with assorted
            # exception types
            raise DecodeFailedError(f"Malformed invoice: {e}") from e

        if decoded.currency != self.network:
            raise DecodeFailedError(
                f"Invoice is for network {decoded.currency!r}, expected {self.network!r}"
            )

        try:
            payment_hash = bytes.fromhex(decoded.payment_hash)
        except Exception as e:
            raise DecodeFailedError("Invoice carries no valid payment hash") from e
        if len(payment_hash) != 32:
            raise DecodeFailedError(
                f"Payment hash must be 32 bytes, got {len(payment_hash)}"
            )

        return Invoice(payment_hash=payment_hash, encoded=encoded.strip())
