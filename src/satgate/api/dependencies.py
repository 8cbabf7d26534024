"""FastAPI dependencies for the gateway API."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends

from ..application.use_cases.address_resolver import LightningAddressResolver
from ..application.use_cases.assets import AssetService
from ..application.use_cases.invoice_minting import InvoiceMintingService
from ..application.use_cases.materializer import PreviewMaterializer
from ..application.use_cases.upload import AssetUploadService
from ..domain.assets.asset_repository import AssetRepository
from ..domain.lightning.challenge_repository import ChallengeRepository
from ..env import Settings, get_settings
from ..infrastructure.assets.asset_repository_impl import AssetRepositoryImpl
from ..infrastructure.assets.file_store import TieredAssetStore
from ..infrastructure.database import DatabaseClient, get_database_client
from ..infrastructure.lightning.bolt11_decoder import Bolt11InvoiceDecoder
from ..infrastructure.lightning.challenge_repository_impl import ChallengeRepositoryImpl
from ..infrastructure.lightning.lnurl_client import LnurlPayClient
from ..infrastructure.storage import KeyValueStore, RedisKeyValueStore


def get_database_client_with_settings(
    settings: Settings = Depends(get_settings),
) -> DatabaseClient:
    """Get database client with settings."""
    return get_database_client(settings)


def get_key_value_store(
    db_client: DatabaseClient = Depends(get_database_client_with_settings),
) -> KeyValueStore:
    """Get key-value store."""
    return RedisKeyValueStore(db_client)


def get_asset_repository(
    store: KeyValueStore = Depends(get_key_value_store),
) -> AssetRepository:
    """Get asset repository."""
    return AssetRepositoryImpl(store)


def get_asset_store(settings: Settings = Depends(get_settings)) -> TieredAssetStore:
    """Get the tiered file store."""
    return TieredAssetStore(settings.asset_dir)


def get_preview_materializer(
    store: TieredAssetStore = Depends(get_asset_store),
    settings: Settings = Depends(get_settings),
) -> PreviewMaterializer:
    """Get preview materializer."""
    return PreviewMaterializer(
        store, radius=settings.blur_radius, quality=settings.preview_quality
    )


def get_asset_service(
    asset_repository: AssetRepository = Depends(get_asset_repository),
    store: TieredAssetStore = Depends(get_asset_store),
) -> AssetService:
    """Get asset service."""
    return AssetService(asset_repository, store)


def get_upload_service(
    asset_repository: AssetRepository = Depends(get_asset_repository),
    store: TieredAssetStore = Depends(get_asset_store),
    materializer: PreviewMaterializer = Depends(get_preview_materializer),
    settings: Settings = Depends(get_settings),
) -> AssetUploadService:
    """Get upload service."""
    return AssetUploadService(
        asset_repository,
        store,
        materializer,
        currency=settings.currency,
        max_upload_bytes=settings.max_upload_bytes,
    )


def build_challenge_repository(settings: Settings) -> ChallengeRepository:
    """Challenge bindings shared by the minting service and the proof verifier."""
    return ChallengeRepositoryImpl(RedisKeyValueStore(get_database_client(settings)))


def build_invoice_minting_service(
    settings: Settings,
    lnurl_client: Optional[LnurlPayClient] = None,
    challenge_repository: Optional[ChallengeRepository] = None,
) -> InvoiceMintingService:
    """Wire the invoice minting flow used by the payment gate middleware.

    The middleware lives outside FastAPI's dependency injection, so the
    service is assembled once at application start.
    """
    lnurl_client = lnurl_client or LnurlPayClient(
        timeout=settings.http_timeout_seconds
    )
    repository = AssetRepositoryImpl(
        RedisKeyValueStore(get_database_client(settings))
    )
    return InvoiceMintingService(
        asset_repository=repository,
        resolver=LightningAddressResolver(
            lnurl_client, skip_failed_candidates=settings.skip_failed_candidates
        ),
        lnurl_client=lnurl_client,
        decoder=Bolt11InvoiceDecoder(network=settings.invoice_network),
        challenge_repository=challenge_repository
        or build_challenge_repository(settings),
        enforce_sendable_bounds=settings.enforce_sendable_bounds,
    )
