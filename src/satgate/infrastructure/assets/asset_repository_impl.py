"""Asset repository implementation over a storage abstraction."""

from __future__ import annotations

from typing import List, Optional

from ...domain.assets.asset_repository import AssetRepository
from ...domain.assets.entities import AssetRecord
from ..storage import KeyValueStore

ASSET_INDEX = "assets:all"


def _asset_key(identifier: str) -> str:
    return f"asset:{identifier}"


class AssetRepositoryImpl(AssetRepository):
    """Asset repository using a KeyValueStore.

    Records live under ``asset:<identifier>`` and are indexed by creation
    time in the ``assets:all`` sorted set.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def create(self, record: AssetRecord) -> AssetRecord:
        inserted = await self.store.insert_indexed(
            _asset_key(record.identifier),
            record.model_dump_json(),
            ASSET_INDEX,
            record.identifier,
            record.created_at.timestamp(),
        )
        if not inserted:
            raise ValueError(f"Asset {record.identifier} already exists")
        return record

    async def get_by_identifier(self, identifier: str) -> Optional[AssetRecord]:
        data = await self.store.get(_asset_key(identifier))
        if not data:
            return None
        return AssetRecord.model_validate_json(data)

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[AssetRecord]:
        identifiers = await self.store.index_range(ASSET_INDEX, skip, limit)
        documents = await self.store.get_many([_asset_key(i) for i in identifiers])
        return [AssetRecord.model_validate_json(doc) for doc in documents if doc]
