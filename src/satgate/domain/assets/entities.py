"""Asset domain entities: AssetRecord, AssetTier and PaymentStatus."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class AssetTier(str, Enum):
    """Visibility tier of a stored file. Values are the tier directory names."""

    PROTECTED = "paid"
    PUBLIC = "free"


class PaymentStatus(str, Enum):
    """Outcome of the payment check for a single request."""

    UNPAID = "unpaid"
    PAID = "paid"


class AssetRecord(BaseModel):
    """Metadata of one uploaded asset. Created once, never mutated."""

    identifier: str = Field(..., min_length=1)
    original_name: str = Field(..., min_length=1)
    payment_address: str = Field(..., min_length=1)
    price: int = Field(..., gt=0, description="Price in satoshis")
    currency: Literal["BTC"] = "BTC"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)

    @field_validator("payment_address")
    @classmethod
    def validate_payment_address(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Payment address cannot be blank")
        return v

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return value.isoformat()

    @property
    def price_msat(self) -> int:
        return self.price * 1000
