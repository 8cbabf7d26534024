"""Lightning address discovery (LUD-16)."""

from __future__ import annotations

import logging
import re
from typing import List

import httpx
from email_validator import EmailNotValidError, validate_email

from ...domain.errors import ResolutionFailedError
from ...domain.lightning.entities import LightningAddress, PayResponse
from ...domain.shared import LnurlClientProtocol

logger = logging.getLogger(__name__)

# Loose scan; every match is re-validated by email-validator.
ADDRESS_PATTERN = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?"
)


def find_lightning_addresses(text: str) -> List[LightningAddress]:
    """Return every well-formed address embedded in ``text``, in order."""
    addresses: List[LightningAddress] = []
    for match in ADDRESS_PATTERN.finditer(text):
        candidate = match.group(0)
        try:
            validated = validate_email(candidate, check_deliverability=False)
        except EmailNotValidError:
            logger.debug("Ignoring malformed address candidate %r", candidate)
            continue
        addresses.append(
            LightningAddress(
                local_part=validated.local_part,
                domain=validated.ascii_domain.lower(),
            )
        )
    return addresses


class LightningAddressResolver:
    """Turn free text containing a Lightning address into LNURL-pay parameters.

    Candidates are tried one at a time, in order of appearance, and the first
    one that advertises a callback wins. Candidates answering without a
    callback are skipped. A failed lookup aborts the whole resolution unless
    ``skip_failed_candidates`` is set, in which case the next candidate is
    tried instead.
    """

    def __init__(
        self,
        lnurl_client: LnurlClientProtocol,
        *,
        skip_failed_candidates: bool = False,
    ):
        self.lnurl_client = lnurl_client
        self.skip_failed_candidates = skip_failed_candidates

    async def resolve(self, text: str) -> PayResponse:
        candidates = find_lightning_addresses(text)
        if not candidates:
            raise ResolutionFailedError(f"No Lightning address found in {text!r}")

        for address in candidates:
            try:
                pay_response = await self.lnurl_client.fetch_pay_response(
                    address.well_known_url
                )
            except httpx.HTTPError as e:
                if self.skip_failed_candidates:
                    logger.warning("Lookup of %s failed, skipping: %s", address, e)
                    continue
                raise ResolutionFailedError(
                    f"Could not reach Lightning address {address}: {e}"
                ) from e
            except ValueError as e:
                if self.skip_failed_candidates:
                    logger.warning("Malformed response for %s, skipping: %s", address, e)
                    continue
                raise ResolutionFailedError(
                    f"Malformed LNURL-pay response for {address}: {e}"
                ) from e

            if pay_response.callback:
                logger.info("Resolved %s to %s", address, pay_response.callback)
                return pay_response
            logger.warning("Lightning address %s has no callback", address)

        raise ResolutionFailedError(f"No usable Lightning address found in {text!r}")
