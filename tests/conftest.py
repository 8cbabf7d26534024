"""Shared pytest fixtures for the gateway tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generator

import pytest
from PIL import Image, ImageDraw

from satgate.domain.assets.entities import AssetRecord
from satgate.infrastructure.assets.asset_repository_impl import AssetRepositoryImpl
from satgate.infrastructure.assets.file_store import TieredAssetStore
from tests.fixtures import InMemoryKeyValueStore


@pytest.fixture
def kv_store() -> Generator[InMemoryKeyValueStore, None, None]:
    """Create an in-memory key-value store."""
    store = InMemoryKeyValueStore()
    yield store
    store.clear()


@pytest.fixture
def asset_repository(kv_store: InMemoryKeyValueStore) -> AssetRepositoryImpl:
    """Asset repository over the in-memory store."""
    return AssetRepositoryImpl(kv_store)


@pytest.fixture
def asset_record() -> AssetRecord:
    """The asset used by the concrete minting scenario."""
    return AssetRecord(
        identifier="abc123",
        original_name="sunset.png",
        payment_address="alice@example.com",
        price=500,
    )


@pytest.fixture
def tiered_store(tmp_path: Path) -> TieredAssetStore:
    """File store rooted in a temporary directory."""
    store = TieredAssetStore(tmp_path / "assets")
    store.ensure_directories()
    return store


def draw_checkerboard(width: int = 120, height: int = 80, square: int = 8) -> Image.Image:
    """High-frequency RGB test image."""
    img = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(img)
    for y in range(0, height, square):
        for x in range(0, width, square):
            if (x // square + y // square) % 2 == 0:
                draw.rectangle([x, y, x + square - 1, y + square - 1], fill=(200, 30, 30))
    return img


@pytest.fixture
def image_bytes(tmp_path: Path) -> Callable[..., bytes]:
    """Factory returning an encoded checkerboard image."""

    def _make(fmt: str = "PNG", width: int = 120, height: int = 80) -> bytes:
        path = tmp_path / f"source.{fmt.lower()}"
        draw_checkerboard(width, height).save(path, format=fmt)
        return path.read_bytes()

    return _make
