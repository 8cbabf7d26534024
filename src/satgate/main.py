from __future__ import annotations

import logging
import os
from pathlib import Path

import uvicorn

from .env import get_settings

logger = logging.getLogger("satgate")


def _reset_prometheus_multiproc_dir() -> None:
    """Empty ``PROMETHEUS_MULTIPROC_DIR`` so forked workers start from zero."""
    prom_dir = os.environ.get("PROMETHEUS_MULTIPROC_DIR")
    if not prom_dir:
        return
    path = Path(prom_dir)
    path.mkdir(parents=True, exist_ok=True)
    for stale in path.iterdir():
        if stale.is_file():
            stale.unlink()


def main() -> None:
    """Run the gateway under uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.api_debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    base_url = f"http://{settings.api_host}:{settings.api_port}"
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Metadata store: %s", settings.database_url)
    logger.info("Asset directory: %s", Path(settings.asset_dir).resolve())
    logger.info("Accepting invoices for network %r", settings.invoice_network)
    logger.info("Upload form at %s/api/v1/assets/, docs at %s/docs", base_url, base_url)

    # reload only works with a single worker
    reload = settings.api_debug
    _reset_prometheus_multiproc_dir()

    uvicorn.run(
        "satgate.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        workers=1 if reload else settings.api_workers,
        log_level="debug" if settings.api_debug else "info",
    )


if __name__ == "__main__":
    main()
