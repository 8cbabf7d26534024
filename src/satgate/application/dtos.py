"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..domain.assets.entities import AssetRecord


class UploadAssetDTO(BaseModel):
    """DTO for the form fields accompanying an uploaded file."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "filename": "sunset.png",
                "payment_address": "alice@example.com",
                "price": 500,
            }
        }
    )

    filename: str = ""
    payment_address: str = ""
    price: int = 0


class AssetDTO(BaseModel):
    """DTO for returning stored asset metadata."""

    identifier: str
    original_name: str
    payment_address: str
    price: int
    currency: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return value.isoformat()

    @classmethod
    def from_record(cls, record: AssetRecord) -> "AssetDTO":
        return cls(
            identifier=record.identifier,
            original_name=record.original_name,
            payment_address=record.payment_address,
            price=record.price,
            currency=record.currency,
            created_at=record.created_at,
        )


class AssetIndexEntryDTO(BaseModel):
    """One row of the public asset listing."""

    url: str
    name: str
    ln_address: str
    price: int
    currency: str


class UploadResponseDTO(BaseModel):
    """DTO returned after a successful upload."""

    msg: str = Field(
        default="File successfully uploaded. You can close this page."
    )
    url: str
