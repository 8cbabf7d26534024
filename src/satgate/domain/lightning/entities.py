"""Lightning domain values: LNURL-pay parameters and decoded invoices."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PayResponse(BaseModel):
    """LNURL-pay parameters served from a Lightning address' well-known URL."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    callback: str = ""
    min_sendable: int = Field(0, alias="minSendable", ge=0)
    max_sendable: int = Field(0, alias="maxSendable", ge=0)
    metadata: str = ""
    tag: str = ""
    comment_allowed: Optional[int] = Field(None, alias="commentAllowed")

    def accepts(self, amount_msat: int) -> bool:
        """Whether the amount lies within the advertised sendable bounds.

        A bound of zero means the payee did not advertise one.
        """
        if self.min_sendable and amount_msat < self.min_sendable:
            return False
        if self.max_sendable and amount_msat > self.max_sendable:
            return False
        return True


class InvoiceResponse(BaseModel):
    """Body returned by an LNURL-pay callback."""

    model_config = ConfigDict(extra="ignore")

    pr: str = ""
    status: Optional[str] = None
    reason: Optional[str] = None


class Invoice(BaseModel):
    """A payable invoice: the raw BOLT11 string and its payment hash."""

    model_config = ConfigDict(frozen=True)

    payment_hash: bytes = Field(..., min_length=32, max_length=32)
    encoded: str = Field(..., min_length=1)

    @property
    def payment_hash_hex(self) -> str:
        return self.payment_hash.hex()


class LightningAddress(BaseModel):
    """An email-shaped Lightning address (``local_part@domain``)."""

    model_config = ConfigDict(frozen=True)

    local_part: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)

    @property
    def well_known_url(self) -> str:
        """LNURL-pay discovery URL (LUD-16)."""
        return f"https://{self.domain}/.well-known/lnurlp/{self.local_part}"

    def __str__(self) -> str:
        return f"{self.local_part}@{self.domain}"
