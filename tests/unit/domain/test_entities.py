"""Unit tests for domain entities and value objects."""

import pytest
from pydantic import ValidationError

from satgate.domain.assets.entities import AssetRecord
from satgate.domain.lightning.entities import (
    Invoice,
    InvoiceResponse,
    LightningAddress,
    PayResponse,
)


class TestAssetRecord:
    def test_price_in_millisatoshis(self) -> None:
        record = AssetRecord(
            identifier="abc123",
            original_name="a.png",
            payment_address="alice@example.com",
            price=500,
        )
        assert record.price_msat == 500_000
        assert record.currency == "BTC"

    @pytest.mark.parametrize("price", [0, -1])
    def test_price_must_be_positive(self, price: int) -> None:
        with pytest.raises(ValidationError):
            AssetRecord(
                identifier="abc123",
                original_name="a.png",
                payment_address="alice@example.com",
                price=price,
            )

    @pytest.mark.parametrize("address", ["", "   "])
    def test_payment_address_required(self, address: str) -> None:
        with pytest.raises(ValidationError):
            AssetRecord(
                identifier="abc123",
                original_name="a.png",
                payment_address=address,
                price=1,
            )

    def test_only_btc_is_supported(self) -> None:
        with pytest.raises(ValidationError):
            AssetRecord(
                identifier="abc123",
                original_name="a.png",
                payment_address="alice@example.com",
                price=1,
                currency="USD",
            )

    def test_record_is_immutable(self) -> None:
        record = AssetRecord(
            identifier="abc123",
            original_name="a.png",
            payment_address="alice@example.com",
            price=1,
        )
        with pytest.raises(ValidationError):
            record.price = 2

    def test_json_round_trip_keeps_created_at(self) -> None:
        record = AssetRecord(
            identifier="abc123",
            original_name="a.png",
            payment_address="alice@example.com",
            price=1,
        )
        assert AssetRecord.model_validate_json(record.model_dump_json()) == record


class TestPayResponse:
    def test_parses_lnurl_pay_document(self) -> None:
        pay = PayResponse.model_validate(
            {
                "callback": "https://example.com/invoice",
                "minSendable": 1000,
                "maxSendable": 1000000,
                "metadata": '[["text/plain","alice"]]',
                "tag": "payRequest",
                "commentAllowed": 255,
                "allowsNostr": True,
            }
        )
        assert pay.callback == "https://example.com/invoice"
        assert pay.min_sendable == 1000
        assert pay.max_sendable == 1000000
        assert pay.comment_allowed == 255

    def test_error_document_has_no_callback(self) -> None:
        pay = PayResponse.model_validate({"status": "ERROR", "reason": "unknown user"})
        assert pay.callback == ""

    def test_accepts_within_bounds(self) -> None:
        pay = PayResponse(callback="x", minSendable=1000, maxSendable=1000000)
        assert pay.accepts(1000)
        assert pay.accepts(1000000)
        assert not pay.accepts(999)
        assert not pay.accepts(1000001)

    def test_missing_bounds_accept_anything(self) -> None:
        assert PayResponse(callback="x").accepts(10**12)


class TestInvoice:
    def test_payment_hash_must_be_32_bytes(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(payment_hash=b"\x00" * 31, encoded="lnbc1")

    def test_payment_hash_hex(self) -> None:
        invoice = Invoice(payment_hash=bytes(range(32)), encoded="lnbc1")
        assert invoice.payment_hash_hex == bytes(range(32)).hex()

    def test_invoice_response_ignores_extra_fields(self) -> None:
        resp = InvoiceResponse.model_validate({"pr": "lnbc1", "routes": []})
        assert resp.pr == "lnbc1"


def test_lightning_address_well_known_url() -> None:
    address = LightningAddress(local_part="alice", domain="example.com")
    assert address.well_known_url == "https://example.com/.well-known/lnurlp/alice"
    assert str(address) == "alice@example.com"
