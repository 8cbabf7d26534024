"""Use case for uploading a new protected asset."""

from __future__ import annotations

import logging
import posixpath
from uuid import uuid4

from ...domain.assets.asset_repository import AssetRepository
from ...domain.assets.entities import AssetRecord
from ...domain.errors import InvalidUploadError
from ...infrastructure.assets.file_store import TieredAssetStore
from ..dtos import AssetDTO, UploadAssetDTO
from .materializer import PreviewMaterializer

logger = logging.getLogger(__name__)


class AssetUploadService:
    """Stores an original, derives its preview and records its metadata.

    The upload is all-or-nothing: the record is written last, and any failure
    before that removes whatever was written to either tier.
    """

    def __init__(
        self,
        asset_repository: AssetRepository,
        store: TieredAssetStore,
        materializer: PreviewMaterializer,
        *,
        currency: str = "BTC",
        max_upload_bytes: int = 20 * 1024 * 1024,
    ):
        self.asset_repository = asset_repository
        self.store = store
        self.materializer = materializer
        self.currency = currency
        self.max_upload_bytes = max_upload_bytes

    def _validate(self, dto: UploadAssetDTO, content: bytes) -> str:
        original_name = posixpath.basename(dto.filename.replace("\\", "/"))
        if not dto.payment_address.strip() or dto.price <= 0 or not content:
            raise InvalidUploadError("ln address, price and file must be set")
        if not original_name or original_name in (".", ".."):
            raise InvalidUploadError("file must have a name")
        if len(content) > self.max_upload_bytes:
            raise InvalidUploadError(
                f"file exceeds the {self.max_upload_bytes} byte upload limit"
            )
        return original_name

    async def upload(self, dto: UploadAssetDTO, content: bytes) -> AssetDTO:
        original_name = self._validate(dto, content)
        identifier = f"{uuid4()}_{original_name}"

        try:
            protected_path = self.store.write_protected(identifier, content)
            await self.materializer.materialize(protected_path)
            record = await self.asset_repository.create(
                AssetRecord(
                    identifier=identifier,
                    original_name=original_name,
                    payment_address=dto.payment_address.strip(),
                    price=dto.price,
                    currency=self.currency,
                )
            )
        except BaseException:
            self.store.discard(identifier)
            raise

        logger.info("Stored asset %s priced at %d sats", identifier, record.price)
        return AssetDTO.from_record(record)
