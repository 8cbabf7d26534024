"""Test fixtures for in-memory implementations."""

from .in_memory_storage import InMemoryKeyValueStore
from .fake_lightning import (
    BOLT11_EXAMPLE,
    BOLT11_EXAMPLE_PAYMENT_HASH,
    FakeInvoiceDecoder,
    LnurlServer,
    make_invoice,
)

__all__ = [
    "BOLT11_EXAMPLE",
    "BOLT11_EXAMPLE_PAYMENT_HASH",
    "FakeInvoiceDecoder",
    "InMemoryKeyValueStore",
    "LnurlServer",
    "make_invoice",
]
