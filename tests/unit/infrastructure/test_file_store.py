"""Unit tests for the tiered file store."""

from pathlib import Path

import pytest

from satgate.domain.assets.entities import AssetTier
from satgate.infrastructure.assets.file_store import TieredAssetStore


def test_tiers_are_sibling_directories(tiered_store: TieredAssetStore) -> None:
    protected = tiered_store.path_for("abc123_a.png", AssetTier.PROTECTED)
    public = tiered_store.path_for("abc123_a.png", AssetTier.PUBLIC)
    assert protected.parent.parent == public.parent.parent
    assert protected.parent.name == "paid"
    assert public.parent.name == "free"
    assert protected.name == public.name == "abc123_a.png"


def test_mirror_path_substitutes_tier(tiered_store: TieredAssetStore) -> None:
    protected = tiered_store.write_protected("abc123_a.png", b"data")
    assert tiered_store.mirror_path(protected) == tiered_store.path_for(
        "abc123_a.png", AssetTier.PUBLIC
    )


def test_mirror_path_rejects_public_files(tiered_store: TieredAssetStore) -> None:
    public = tiered_store.path_for("abc123_a.png", AssetTier.PUBLIC)
    with pytest.raises(ValueError):
        tiered_store.mirror_path(public)


@pytest.mark.parametrize("identifier", ["", ".", "..", "../secret", "a/b"])
def test_rejects_identifiers_escaping_tier(
    tiered_store: TieredAssetStore, identifier: str
) -> None:
    with pytest.raises(ValueError):
        tiered_store.path_for(identifier, AssetTier.PROTECTED)


def test_write_exists_and_discard(tmp_path: Path) -> None:
    store = TieredAssetStore(tmp_path)
    store.write_protected("abc", b"original")
    store.path_for("abc", AssetTier.PUBLIC).parent.mkdir(parents=True)
    store.path_for("abc", AssetTier.PUBLIC).write_bytes(b"preview")

    assert store.exists("abc", AssetTier.PROTECTED)
    assert store.exists("abc", AssetTier.PUBLIC)

    store.discard("abc")
    assert not store.exists("abc", AssetTier.PROTECTED)
    assert not store.exists("abc", AssetTier.PUBLIC)
    # discarding twice is harmless
    store.discard("abc")
