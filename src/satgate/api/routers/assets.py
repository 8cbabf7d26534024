"""Asset catalog and upload API routes."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from prometheus_client import Counter

from ...application.dtos import AssetIndexEntryDTO, UploadAssetDTO, UploadResponseDTO
from ...application.use_cases.assets import AssetService
from ...application.use_cases.upload import AssetUploadService
from ...domain.errors import InvalidUploadError, MaterializationFailedError
from ...env import Settings, get_settings
from ..dependencies import get_asset_service, get_upload_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])

asset_uploads_total = Counter(
    "asset_uploads_total",
    "Total asset uploads processed",
    ["status"],
)


UPLOAD_CHUNK_BYTES = 64 * 1024


async def _read_bounded(file: Optional[UploadFile], limit: int) -> bytes:
    """Read an upload, failing as soon as it grows past ``limit`` bytes."""
    if file is None:
        return b""
    chunks: list[bytes] = []
    size = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        size += len(chunk)
        if size > limit:
            raise InvalidUploadError(f"file exceeds the {limit} byte upload limit")
        chunks.append(chunk)
    return b"".join(chunks)


@router.get("/", response_model=List[AssetIndexEntryDTO])
async def list_assets(
    request: Request,
    skip: int = 0,
    limit: int = 100,
    asset_service: AssetService = Depends(get_asset_service),
) -> List[AssetIndexEntryDTO]:
    """List uploaded assets with their price and payment address."""
    return await asset_service.list_assets(
        str(request.base_url), skip=skip, limit=limit
    )


@router.post(
    "/", response_model=UploadResponseDTO, status_code=status.HTTP_201_CREATED
)
async def upload_asset(
    request: Request,
    file: Optional[UploadFile] = File(None),
    ln_address: str = Form(""),
    price: str = Form(""),
    upload_service: AssetUploadService = Depends(get_upload_service),
    settings: Settings = Depends(get_settings),
) -> UploadResponseDTO:
    """Upload an image, priced in sats, payable to a Lightning address."""
    try:
        price_sats = int(price)
    except ValueError:
        asset_uploads_total.labels(status="client_error").inc()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Price in sats needs to be specified",
        )

    dto = UploadAssetDTO(
        filename=(file.filename or "") if file is not None else "",
        payment_address=ln_address,
        price=price_sats,
    )
    try:
        content = await _read_bounded(file, settings.max_upload_bytes)
        asset = await upload_service.upload(dto, content)
    except InvalidUploadError as e:
        asset_uploads_total.labels(status="client_error").inc()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MaterializationFailedError as e:
        asset_uploads_total.labels(status="client_error").inc()
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )
    except Exception as e:
        asset_uploads_total.labels(status="server_error").inc()
        logger.exception("Failed to store upload")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store upload: {str(e)}",
        )

    asset_uploads_total.labels(status="success").inc()
    return UploadResponseDTO(url=f"{request.base_url}assets/{asset.identifier}")
