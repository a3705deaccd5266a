from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.errors import InvalidPayloadError
from engines.order_lifecycle.commands import (
    CREATE_SALES_ORDER,
    UNKNOWN,
    ClassifiedIntent,
    LineItemRequest,
    normalize_order_number,
)


def test_from_payload_parses_full_command() -> None:
    intent = ClassifiedIntent.from_payload({
        "intent": "create_sales_order",
        "party_name": "  Hilton   Hotels India ",
        "due_date": "2026-03-01",
        "line_items": [
            {"product_name": "kingfisher", "quantity": 800},
            {"product_name": "tuborg", "product_quantity": "2.5"},
        ],
        "summary": "order from hilton",
        "ignored_key": True,
    })

    assert intent.intent == CREATE_SALES_ORDER
    assert intent.party_name == "Hilton Hotels India"
    assert intent.due_date == datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert intent.line_items == (
        LineItemRequest(product_name="kingfisher", quantity=Decimal("800")),
        LineItemRequest(product_name="tuborg", quantity=Decimal("2.5")),
    )


def test_missing_intent_is_unknown() -> None:
    assert ClassifiedIntent.from_payload({}).intent == UNKNOWN


def test_order_number_normalization() -> None:
    assert normalize_order_number("  #so-12 ") == "SO-12"
    assert normalize_order_number("   ") is None
    assert normalize_order_number(None) is None
    assert ClassifiedIntent.from_payload(
        {"intent": "STATUS_CHECK", "order_number": "so-3"}
    ).order_number == "SO-3"


def test_payment_amount_is_decimal() -> None:
    intent = ClassifiedIntent.from_payload(
        {"intent": "RECORD_PAYMENT", "customer_payment_amount": 400.5}
    )
    assert intent.customer_payment_amount == Decimal("400.5")


def test_timezone_aware_due_date_is_kept() -> None:
    intent = ClassifiedIntent.from_payload(
        {"intent": "CREATE_SALES_ORDER", "due_date": "2026-03-01T10:00:00+05:30"}
    )
    assert intent.due_date.utcoffset().total_seconds() == 5.5 * 3600


@pytest.mark.parametrize(
    "payload",
    [
        {"intent": "CREATE_SALES_ORDER", "line_items": "kingfisher"},
        {"intent": "CREATE_SALES_ORDER", "line_items": ["kingfisher"]},
        {"intent": "CREATE_SALES_ORDER", "line_items": [{"product_name": "kingfisher"}]},
        {"intent": "CREATE_SALES_ORDER", "line_items": [{"quantity": 1}]},
        {"intent": "CREATE_SALES_ORDER", "line_items": [{"product_name": "x", "quantity": "many"}]},
        {"intent": "RECORD_PAYMENT", "customer_payment_amount": True},
        {"intent": "RECORD_PAYMENT", "customer_payment_amount": "NaN"},
        {"intent": "CREATE_SALES_ORDER", "due_date": "next tuesday"},
    ],
)
def test_malformed_payloads_are_rejected(payload) -> None:
    with pytest.raises(InvalidPayloadError):
        ClassifiedIntent.from_payload(payload)


def test_non_mapping_is_rejected() -> None:
    with pytest.raises(InvalidPayloadError):
        ClassifiedIntent.from_payload(["CREATE_SALES_ORDER"])


def test_intent_is_frozen() -> None:
    intent = ClassifiedIntent(intent=CREATE_SALES_ORDER)
    with pytest.raises(AttributeError):
        intent.order_number = "SO-1"


def test_quantity_with_cent_precision_is_accepted() -> None:
    intent = ClassifiedIntent.from_payload({
        "intent": "CREATE_SALES_ORDER",
        "line_items": [
            {"product_name": "tuborg", "quantity": "2.25"},
            {"product_name": "kingfisher", "quantity": "1.000"},
        ],
    })
    assert [line.quantity for line in intent.line_items] == [Decimal("2.25"), Decimal("1")]


@pytest.mark.parametrize("quantity", ["0.004", "1.255", "1e-3"])
def test_quantity_finer_than_cents_is_rejected(quantity) -> None:
    with pytest.raises(InvalidPayloadError, match="at most 2 decimal places"):
        ClassifiedIntent.from_payload({
            "intent": "CREATE_SALES_ORDER",
            "line_items": [{"product_name": "kingfisher", "quantity": quantity}],
        })


def test_line_item_rejects_fine_quantity_when_built_directly() -> None:
    with pytest.raises(InvalidPayloadError):
        LineItemRequest(product_name="kingfisher", quantity=Decimal("0.004"))


def test_quantity_beyond_column_range_is_rejected() -> None:
    with pytest.raises(InvalidPayloadError, match="exceeds the maximum"):
        ClassifiedIntent.from_payload({
            "intent": "CREATE_SALES_ORDER",
            "line_items": [{"product_name": "kingfisher", "quantity": "1e15"}],
        })


def test_payment_beyond_column_range_is_rejected() -> None:
    with pytest.raises(InvalidPayloadError, match="customer_payment_amount"):
        ClassifiedIntent.from_payload(
            {"intent": "RECORD_PAYMENT", "order_number": "SO-1", "customer_payment_amount": "1e15"}
        )
    with pytest.raises(InvalidPayloadError):
        ClassifiedIntent(intent="RECORD_PAYMENT", customer_payment_amount=Decimal("-1e12"))
