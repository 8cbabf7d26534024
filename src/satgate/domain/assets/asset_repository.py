"""Asset domain repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import AssetRecord


class AssetRepository(ABC):
    """Abstract repository interface for AssetRecord entities."""

    @abstractmethod
    async def create(self, record: AssetRecord) -> AssetRecord:
        """Persist a new asset record."""
        pass

    @abstractmethod
    async def get_by_identifier(self, identifier: str) -> Optional[AssetRecord]:
        """Get an asset record by its identifier."""
        pass

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> List[AssetRecord]:
        """Get all asset records, newest first."""
        pass
