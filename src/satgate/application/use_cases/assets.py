"""Use cases for listing and serving stored assets."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ...domain.assets.asset_repository import AssetRepository
from ...domain.assets.entities import AssetTier, PaymentStatus
from ...domain.errors import AssetNotFoundError
from ...infrastructure.assets.file_store import TieredAssetStore
from ..dtos import AssetIndexEntryDTO


class AssetService:
    """Service for read-only asset operations."""

    def __init__(self, asset_repository: AssetRepository, store: TieredAssetStore):
        self.asset_repository = asset_repository
        self.store = store

    async def list_assets(
        self, base_url: str, skip: int = 0, limit: int = 100
    ) -> List[AssetIndexEntryDTO]:
        """List assets, newest first, with their public access URL."""
        records = await self.asset_repository.get_all(skip=skip, limit=limit)
        base_url = base_url.rstrip("/")
        return [
            AssetIndexEntryDTO(
                url=f"{base_url}/assets/{record.identifier}",
                name=record.original_name,
                ln_address=record.payment_address,
                price=record.price,
                currency=record.currency,
            )
            for record in records
        ]

    def select_file(self, identifier: str, status: PaymentStatus) -> Path:
        """Path of the tier a requester with ``status`` may receive."""
        tier = AssetTier.PROTECTED if status is PaymentStatus.PAID else AssetTier.PUBLIC
        try:
            path = self.store.path_for(identifier, tier)
        except ValueError as e:
            raise AssetNotFoundError(str(e)) from e
        if not path.is_file():
            raise AssetNotFoundError(f"Asset {identifier} not found")
        return path
