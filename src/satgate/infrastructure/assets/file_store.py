"""Filesystem storage for the two asset tiers.

Both tiers are sibling directories under one root and address files by the
same identifier, so the public path is always derivable from the protected
one::

    <root>/paid/<identifier>   original, served after payment
    <root>/free/<identifier>   blurred preview, served to everyone
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from ...domain.assets.entities import AssetTier


class TieredAssetStore:
    """Read/write access to the protected and public asset tiers."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def ensure_directories(self) -> None:
        for tier in AssetTier:
            (self.root / tier.value).mkdir(parents=True, exist_ok=True)

    def path_for(self, identifier: str, tier: AssetTier) -> Path:
        if (
            not identifier
            or identifier in (".", "..")
            or os.sep in identifier
            or "/" in identifier
        ):
            raise ValueError(f"Invalid asset identifier: {identifier!r}")
        return self.root / tier.value / identifier

    def mirror_path(self, protected_path: Union[str, Path]) -> Path:
        """Public-tier path for a file stored in the protected tier."""
        protected_path = Path(protected_path)
        if protected_path.parent != self.root / AssetTier.PROTECTED.value:
            raise ValueError(f"{protected_path} is not in the protected tier")
        return self.path_for(protected_path.name, AssetTier.PUBLIC)

    def exists(self, identifier: str, tier: AssetTier) -> bool:
        return self.path_for(identifier, tier).is_file()

    def write_protected(self, identifier: str, content: bytes) -> Path:
        path = self.path_for(identifier, AssetTier.PROTECTED)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    def discard(self, identifier: str) -> None:
        """Remove the files of both tiers; missing files are ignored."""
        for tier in AssetTier:
            self.path_for(identifier, tier).unlink(missing_ok=True)
