from __future__ import annotations

import os

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Typed application settings built from environment variables."""

    # Database settings
    database_url: str = "redis://localhost:6379/0"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_workers: int = 1
    api_cors_origins: list[str] = ["*"]

    # Application settings
    app_name: str = "SatGate"
    app_version: str = "1.0.0"

    # Asset settings
    asset_dir: str = "assets"
    max_upload_bytes: int = 20 * 1024 * 1024
    blur_radius: float = 100.0
    preview_quality: int = 75
    currency: str = "BTC"

    # Lightning settings
    http_timeout_seconds: float = 10.0
    invoice_network: str = "bc"
    enforce_sendable_bounds: bool = True
    skip_failed_candidates: bool = False

    @field_validator("blur_radius", "http_timeout_seconds", "max_upload_bytes")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("preview_quality")
    @classmethod
    def validate_preview_quality(cls, v: int) -> int:
        if not 1 <= v <= 95:
            raise ValueError("Preview quality must be between 1 and 95")
        return v

    @field_validator("invoice_network")
    @classmethod
    def validate_invoice_network(cls, v: str) -> str:
        if not v:
            raise ValueError("Invoice network cannot be empty")
        return v.lower()


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        database_url=os.environ.get("SATGATE_DATABASE_URL", "redis://localhost:6379/0"),
        api_host=os.environ.get("SATGATE_API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("SATGATE_API_PORT", "8000")),
        api_debug=_env_bool("SATGATE_API_DEBUG", "false"),
        api_workers=int(os.environ.get("SATGATE_API_WORKERS", "1")),
        api_cors_origins=os.environ.get("SATGATE_API_CORS_ORIGINS", "*").split(","),
        app_name=os.environ.get("SATGATE_APP_NAME", "SatGate"),
        app_version=os.environ.get("SATGATE_APP_VERSION", "1.0.0"),
        asset_dir=os.environ.get("SATGATE_ASSET_DIR", "assets"),
        max_upload_bytes=int(
            os.environ.get("SATGATE_MAX_UPLOAD_BYTES", str(20 * 1024 * 1024))
        ),
        blur_radius=float(os.environ.get("SATGATE_BLUR_RADIUS", "100")),
        preview_quality=int(os.environ.get("SATGATE_PREVIEW_QUALITY", "75")),
        http_timeout_seconds=float(
            os.environ.get("SATGATE_HTTP_TIMEOUT_SECONDS", "10")
        ),
        invoice_network=os.environ.get("SATGATE_INVOICE_NETWORK", "bc"),
        enforce_sendable_bounds=_env_bool("SATGATE_ENFORCE_SENDABLE_BOUNDS", "true"),
        skip_failed_candidates=_env_bool("SATGATE_SKIP_FAILED_CANDIDATES", "false"),
    )
