"""Pillow based preview rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from PIL import Image, ImageFilter

from ...domain.errors import MaterializationFailedError


def render_blurred_preview(
    source: Union[str, Path],
    destination: Union[str, Path],
    radius: float,
    quality: int,
) -> tuple[int, int]:
    """Blur ``source`` and write it to ``destination`` as JPEG.

    Returns the (width, height) of the written image, which always matches
    the source.
    """
    try:
        with Image.open(source) as img:
            img.load()
            rgb = img.convert("RGB")
        blurred = rgb.filter(ImageFilter.GaussianBlur(radius=radius))
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
        blurred.save(destination, format="JPEG", quality=quality)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise MaterializationFailedError(
            f"Could not render preview of {Path(source).name}: {e}"
        ) from e
    return blurred.size
