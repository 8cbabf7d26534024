"""Issued payment challenges repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class ChallengeRepository(ABC):
    """Remembers which asset each minted invoice's payment hash unlocks."""

    @abstractmethod
    async def bind(self, payment_hash: bytes, identifier: str) -> bool:
        """Bind ``payment_hash`` to ``identifier``.

        Returns False when the hash is already bound to a different asset.
        """
        pass

    @abstractmethod
    async def get_identifier(self, payment_hash: bytes) -> Optional[str]:
        """Asset unlocked by ``payment_hash``, or None if it was never issued."""
        pass
