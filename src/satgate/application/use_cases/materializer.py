"""Public preview derivation for freshly uploaded assets."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Union

from ...infrastructure.assets.file_store import TieredAssetStore
from ...infrastructure.imaging.blur import render_blurred_preview

logger = logging.getLogger(__name__)


class PreviewMaterializer:
    """Writes a heavily blurred copy of a protected file to the public tier.

    The blur keeps the overall composition recognisable while destroying the
    detail that gives the original its value.
    """

    def __init__(
        self, store: TieredAssetStore, radius: float = 100.0, quality: int = 75
    ):
        self.store = store
        self.radius = radius
        self.quality = quality

    async def materialize(self, protected_path: Union[str, Path]) -> Path:
        """Render the preview of ``protected_path``; returns the public path.

        Raises:
            MaterializationFailedError: the source cannot be decoded or the
                preview cannot be written
        """
        public_path = self.store.mirror_path(protected_path)
        # Pillow work is CPU bound and blocking
        width, height = await asyncio.to_thread(
            render_blurred_preview,
            protected_path,
            public_path,
            self.radius,
            self.quality,
        )
        logger.info("Rendered %dx%d preview at %s", width, height, public_path)
        return public_path
