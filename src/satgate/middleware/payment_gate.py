"""Lightning payment gate for protected asset downloads."""

from __future__ import annotations

import functools
import hashlib
import hmac
import inspect
import logging
import time
from typing import Callable, Optional, Protocol

from fastapi import status
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..domain.assets.entities import PaymentStatus
from ..domain.errors import AssetNotFoundError, PaywallError
from ..domain.lightning.challenge_repository import ChallengeRepository
from ..domain.lightning.entities import Invoice

logger = logging.getLogger(__name__)

invoice_challenges_total = Counter(
    "invoice_challenges_total",
    "Payment challenges requested for protected assets",
    ["status"],
)
invoice_challenge_duration_seconds = Histogram(
    "invoice_challenge_duration_seconds",
    "Wall time to mint a payment challenge",
    ["status"],
)


def log_timing(tag: Optional[str] = None):
    def decorator(func):
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                t0 = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    dt_ms = (time.perf_counter() - t0) * 1000.0
                    logger.debug("[%s] %.3fms", tag or func.__name__, dt_ms)

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            t0 = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                dt_ms = (time.perf_counter() - t0) * 1000.0
                logger.debug("[%s] %.3fms", tag or func.__name__, dt_ms)

        return sync_wrapper

    return decorator


class InvoiceProvider(Protocol):
    async def add_invoice(self, resource_path: str) -> Invoice: ...


class ProofVerifier(Protocol):
    async def verify(self, request: Request) -> PaymentStatus: ...


class PreimageProofVerifier:
    """Accept ``Authorization: L402 <payment_hash_hex>:<preimage_hex>``.

    The request counts as paid when the preimage hashes to the payment hash
    and that hash belongs to an invoice this gateway minted for the asset
    being requested. ``LSAT`` is accepted as a legacy scheme name.
    """

    schemes = ("L402", "LSAT")

    def __init__(
        self, challenges: ChallengeRepository, protected_prefix: str = "/assets/"
    ) -> None:
        self._challenges = challenges
        self._protected_prefix = protected_prefix

    async def verify(self, request: Request) -> PaymentStatus:
        scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
        if scheme.upper() not in self.schemes:
            return PaymentStatus.UNPAID

        payment_hash_hex, _, preimage_hex = credentials.strip().rpartition(":")
        try:
            payment_hash = bytes.fromhex(payment_hash_hex)
            preimage = bytes.fromhex(preimage_hex)
        except ValueError:
            return PaymentStatus.UNPAID
        if len(payment_hash) != 32 or len(preimage) != 32:
            return PaymentStatus.UNPAID
        if not hmac.compare_digest(hashlib.sha256(preimage).digest(), payment_hash):
            return PaymentStatus.UNPAID

        path: str = request.scope["path"]
        identifier = path[len(self._protected_prefix) :]
        bound_identifier = await self._challenges.get_identifier(payment_hash)
        if bound_identifier != identifier:
            logger.warning(
                "Rejected proof for %s: payment hash %s was not issued for it",
                identifier,
                payment_hash_hex,
            )
            return PaymentStatus.UNPAID
        return PaymentStatus.PAID


class PaymentGateMiddleware(BaseHTTPMiddleware):
    """Gate protected asset downloads behind a Lightning payment.

    For requests under ``/assets/``:
    - a request proving payment of an invoice minted for that asset is tagged
      ``PAID`` and served the original;
    - any other request gets a fresh invoice, is tagged ``UNPAID`` and is
      served the public preview with status 402 and a
      ``WWW-Authenticate: L402 invoice="...", payment_hash="..."`` header.

    When the proof cannot be checked or no invoice can be minted the handler
    is never reached, so the protected file is never served by accident.
    """

    def __init__(
        self,
        app,
        invoice_provider: InvoiceProvider,
        proof_verifier: ProofVerifier,
        protected_prefix: str = "/assets/",
    ) -> None:
        super().__init__(app)
        self._invoice_provider = invoice_provider
        self._proof_verifier = proof_verifier
        self._protected_prefix = protected_prefix

    async def dispatch(self, request: Request, call_next: Callable):
        if self._should_skip(request):
            return await call_next(request)

        try:
            payment_status = await self._proof_verifier.verify(request)
        except Exception:
            logger.exception("Could not verify payment proof for %s", request.scope["path"])
            return self._json_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Could not verify payment"
            )
        request.state.payment_status = payment_status
        if payment_status is PaymentStatus.PAID:
            return await call_next(request)

        invoice, error_response = await self._mint_challenge(request.scope["path"])
        if error_response:
            return error_response
        request.state.invoice = invoice

        response = await call_next(request)
        if response.status_code == status.HTTP_200_OK:
            response.status_code = status.HTTP_402_PAYMENT_REQUIRED
            response.headers["WWW-Authenticate"] = self._challenge_header(invoice)
        return response

    def _should_skip(self, request: Request) -> bool:
        path: str = request.scope["path"]
        return request.method.upper() != "GET" or not path.startswith(
            self._protected_prefix
        )

    @log_timing("mint_challenge")
    async def _mint_challenge(self, path: str):
        start_time = time.perf_counter()
        try:
            invoice = await self._invoice_provider.add_invoice(path)
        except AssetNotFoundError as e:
            self._observe("not_found", start_time)
            return None, self._json_error(status.HTTP_404_NOT_FOUND, str(e))
        except PaywallError as e:
            self._observe("upstream_error", start_time)
            logger.warning("Could not mint invoice for %s: %s", path, e)
            return None, self._json_error(
                status.HTTP_502_BAD_GATEWAY, f"Could not create invoice: {e}"
            )
        except Exception:
            self._observe("server_error", start_time)
            logger.exception("Unexpected failure minting invoice for %s", path)
            return None, self._json_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Could not create invoice"
            )
        self._observe("success", start_time)
        return invoice, None

    def _observe(self, outcome: str, start_time: float) -> None:
        invoice_challenges_total.labels(status=outcome).inc()
        invoice_challenge_duration_seconds.labels(status=outcome).observe(
            time.perf_counter() - start_time
        )

    def _challenge_header(self, invoice: Invoice) -> str:
        return (
            f'L402 invoice="{invoice.encoded}", '
            f'payment_hash="{invoice.payment_hash_hex}"'
        )

    def _json_error(self, status_code: int, detail: str) -> Response:
        return JSONResponse(status_code=status_code, content={"detail": detail})
