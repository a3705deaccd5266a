"""
OrderDesk Order Lifecycle Engine - Classified Intents
=====================================================
The engine's sole input: one classified command per invocation.

A ClassifiedIntent is frozen. The engine never rewrites it; values that
are discovered while processing (such as the number of an order created on
demand) travel in an OrderHandle instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from django.utils.dateparse import parse_date, parse_datetime

from core.errors import InvalidPayloadError
from core.orders.models import ensure_storable
from core.tax.calculator import round2


# ══════════════════════════════════════════════════════════════
# INTENT CONSTANTS
# ══════════════════════════════════════════════════════════════

CREATE_SALES_ORDER = "CREATE_SALES_ORDER"
CREATE_FULLFILLMENT = "CREATE_FULLFILLMENT"
CREATE_INVOICE = "CREATE_INVOICE"
RECORD_PAYMENT = "RECORD_PAYMENT"
CHECK_INVENTORY = "CHECK_INVENTORY"
STATUS_CHECK = "STATUS_CHECK"
UNKNOWN = "UNKNOWN"

# Intents that resolve an order, creating one when no order_number is given.
AUTO_CREATE_INTENTS = frozenset({
    CREATE_FULLFILLMENT,
    CREATE_INVOICE,
    RECORD_PAYMENT,
})


# ══════════════════════════════════════════════════════════════
# FIELD PARSERS
# ══════════════════════════════════════════════════════════════

def _clean_optional_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    cleaned = " ".join(str(value).split())
    return cleaned or None


def _parse_decimal(value: Any, *, field_name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidPayloadError(f"{field_name} must be a number.")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise InvalidPayloadError(f"{field_name} must be a number.") from exc
    if not parsed.is_finite():
        raise InvalidPayloadError(f"{field_name} must be a finite number.")
    return parsed


def _parse_due_date(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.combine(day, time.min) if day is not None else None
        except ValueError:
            parsed = None
        if parsed is None:
            raise InvalidPayloadError(f"due_date '{text}' is not a valid date.")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_order_number(value: Any) -> Optional[str]:
    """'  #so-12 ' → 'SO-12'."""
    cleaned = _clean_optional_string(value)
    if cleaned is None:
        return None
    cleaned = cleaned.lstrip("#").strip().upper()
    return cleaned or None


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LineItemRequest:
    """One requested product line, as classified."""
    product_name: str
    quantity: Decimal

    def __post_init__(self):
        if not self.product_name:
            raise InvalidPayloadError("line_items[].product_name must be non-empty.")
        if not isinstance(self.quantity, Decimal):
            raise InvalidPayloadError("line_items[].quantity must be a Decimal.")
        ensure_storable(self.quantity, field_name=f"Quantity for {self.product_name}")
        if self.quantity != round2(self.quantity):
            raise InvalidPayloadError(
                f"Quantity for {self.product_name} allows at most 2 decimal places."
            )

    @classmethod
    def from_payload(cls, raw: Any, *, index: int) -> "LineItemRequest":
        if not isinstance(raw, Mapping):
            raise InvalidPayloadError(f"line_items[{index}] must be an object.")
        quantity_raw = raw.get("quantity")
        if quantity_raw is None:
            quantity_raw = raw.get("product_quantity")
        quantity = _parse_decimal(quantity_raw, field_name=f"line_items[{index}].quantity")
        if quantity is None:
            raise InvalidPayloadError(f"line_items[{index}].quantity is required.")
        return cls(
            product_name=_clean_optional_string(raw.get("product_name")) or "",
            quantity=quantity,
        )


@dataclass(frozen=True)
class ClassifiedIntent:
    """A classified command: intent tag plus optional discriminating fields."""
    intent: str
    party_name: Optional[str] = None
    order_number: Optional[str] = None
    target_product_name: Optional[str] = None
    due_date: Optional[datetime] = None
    customer_payment_amount: Optional[Decimal] = None
    line_items: tuple[LineItemRequest, ...] = field(default_factory=tuple)
    summary: Optional[str] = None

    def __post_init__(self):
        if not self.intent or not isinstance(self.intent, str):
            raise InvalidPayloadError("intent must be a non-empty string.")
        if not isinstance(self.line_items, tuple):
            raise InvalidPayloadError("line_items must be a tuple.")
        if self.customer_payment_amount is not None:
            ensure_storable(
                self.customer_payment_amount, field_name="customer_payment_amount",
            )

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ClassifiedIntent":
        """Parse the inbound command shape; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise InvalidPayloadError("Command must be a JSON object.")

        raw_items = data.get("line_items") or ()
        if not isinstance(raw_items, (list, tuple)):
            raise InvalidPayloadError("line_items must be a list.")

        intent = _clean_optional_string(data.get("intent"))
        return cls(
            intent=intent.upper() if intent else UNKNOWN,
            party_name=_clean_optional_string(data.get("party_name")),
            order_number=normalize_order_number(data.get("order_number")),
            target_product_name=_clean_optional_string(data.get("target_product_name")),
            due_date=_parse_due_date(data.get("due_date")),
            customer_payment_amount=_parse_decimal(
                data.get("customer_payment_amount"),
                field_name="customer_payment_amount",
            ),
            line_items=tuple(
                LineItemRequest.from_payload(raw, index=index)
                for index, raw in enumerate(raw_items)
            ),
            summary=_clean_optional_string(data.get("summary")),
        )
