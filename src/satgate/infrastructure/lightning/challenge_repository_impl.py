"""Challenge repository over the key-value store."""

from __future__ import annotations

from typing import Optional

from ...domain.lightning.challenge_repository import ChallengeRepository
from ..storage import KeyValueStore


def challenge_key(payment_hash: bytes) -> str:
    return f"challenge:{payment_hash.hex()}"


class ChallengeRepositoryImpl(ChallengeRepository):
    """Bindings live under ``challenge:<payment_hash_hex>``; the first one wins."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def bind(self, payment_hash: bytes, identifier: str) -> bool:
        key = challenge_key(payment_hash)
        if await self.store.insert(key, identifier):
            return True
        return await self.store.get(key) == identifier

    async def get_identifier(self, payment_hash: bytes) -> Optional[str]:
        return await self.store.get(challenge_key(payment_hash))
