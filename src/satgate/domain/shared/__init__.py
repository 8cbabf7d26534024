"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .protocols import InvoiceDecoderProtocol, LnurlClientProtocol

__all__ = ["InvoiceDecoderProtocol", "LnurlClientProtocol"]
