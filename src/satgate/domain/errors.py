"""Domain-specific exceptions."""

from __future__ import annotations


class PaywallError(Exception):
    """Base class for every failure raised by the payment gate."""


class AssetNotFoundError(PaywallError):
    """Raised when an asset identifier has no record."""


class ResolutionFailedError(PaywallError):
    """Raised when no usable Lightning address could be discovered."""


class InvoiceRequestFailedError(PaywallError):
    """Raised when the payee endpoint is unreachable or returns no invoice."""


class DecodeFailedError(PaywallError):
    """Raised when an invoice is malformed or issued for another network."""


class AmountOutOfRangeError(PaywallError):
    """Raised when the asset price falls outside the payee's sendable bounds."""


class MaterializationFailedError(PaywallError):
    """Raised when the public preview of an asset cannot be produced."""


class InvalidUploadError(PaywallError):
    """Raised when an upload is missing its file, address or price."""
