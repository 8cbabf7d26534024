"""FastAPI application wiring for the asset gateway."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from ..env import Settings, get_settings
from ..infrastructure.assets.file_store import TieredAssetStore
from ..infrastructure.database import get_database_client
from ..infrastructure.lightning.lnurl_client import LnurlPayClient
from ..middleware.payment_gate import (
    InvoiceProvider,
    PaymentGateMiddleware,
    PreimageProofVerifier,
    ProofVerifier,
)
from .dependencies import build_challenge_repository, build_invoice_minting_service
from .routers import assets, downloads


def create_app(
    settings: Optional[Settings] = None,
    invoice_provider: Optional[InvoiceProvider] = None,
    proof_verifier: Optional[ProofVerifier] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    ``invoice_provider`` and ``proof_verifier`` replace the Lightning-backed
    minting service and the Redis-backed proof check, which are otherwise
    built from ``settings``. Both share one challenge store so that only
    minted payment hashes unlock assets.
    """
    settings = settings or get_settings()
    lnurl_client = LnurlPayClient(timeout=settings.http_timeout_seconds)
    challenges = build_challenge_repository(settings)
    if invoice_provider is None:
        invoice_provider = build_invoice_minting_service(
            settings, lnurl_client, challenges
        )
    if proof_verifier is None:
        proof_verifier = PreimageProofVerifier(challenges)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        TieredAssetStore(settings.asset_dir).ensure_directories()
        yield
        await lnurl_client.aclose()
        await get_database_client(settings).close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Pay-per-download images, paid over Lightning",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Starlette runs the last added middleware first; CORS must see the 402s
    app.add_middleware(
        PaymentGateMiddleware,
        invoice_provider=invoice_provider,
        proof_verifier=proof_verifier,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=["WWW-Authenticate"],
    )

    app.include_router(assets.router, prefix="/api/v1")
    app.include_router(downloads.router)
    app.mount("/metrics", make_asgi_app())

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "catalog": "/api/v1/assets/",
            "downloads": "/assets/{identifier}",
        }

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Liveness plus reachability of the metadata store."""
        redis_ok = await get_database_client(settings).ping()
        return {
            "status": "healthy" if redis_ok else "degraded",
            "redis": redis_ok,
            "version": settings.app_version,
        }

    return app


app = create_app()
