"""Protected asset download route.

The payment gate middleware decides whether the request has paid; this
handler only picks the matching tier.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse

from ...application.use_cases.assets import AssetService
from ...domain.assets.entities import PaymentStatus
from ...domain.errors import AssetNotFoundError
from ..dependencies import get_asset_service

router = APIRouter(tags=["downloads"])


@router.get("/assets/{identifier}", response_class=FileResponse)
async def get_asset(
    identifier: str,
    request: Request,
    asset_service: AssetService = Depends(get_asset_service),
) -> FileResponse:
    """Serve the original to paying requesters and the preview to everyone else."""
    payment_status = getattr(request.state, "payment_status", PaymentStatus.UNPAID)
    try:
        path = asset_service.select_file(identifier, payment_status)
    except AssetNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found"
        )
    if payment_status is PaymentStatus.PAID:
        return FileResponse(path)
    return FileResponse(path, media_type="image/jpeg")
