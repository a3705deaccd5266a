"""
OrderDesk Documents - Normalized Invoice View
=============================================
The shape handed to the document generation collaborator.

Built inside the invoicing transaction from committed-to-be state, then
rendered after the transaction closes. Plain data only: no ORM objects leak
into the generator.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from core.tax.calculator import round2


@dataclass(frozen=True)
class InvoiceViewItem:
    name: str
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class InvoiceView:
    invoice_number: str
    created_date: str
    due_date: Optional[str]
    customer_name: str
    customer_email: str
    subtotal_amount: Decimal
    tax_amount: Decimal
    tax_summary: str
    items: tuple[InvoiceViewItem, ...]
    currency: str
    total_amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["items"] = [asdict(item) for item in self.items]
        return data


def _format_date(value: datetime | None) -> Optional[str]:
    if value is None:
        return None
    return value.date().isoformat()


def build_invoice_view(order, *, currency: str) -> InvoiceView:
    """
    Normalize an order (with party and items loaded) into an InvoiceView.

    ``invoice_number`` carries the display number, which is what customers
    quote back.
    """
    items = tuple(
        InvoiceViewItem(
            name=item.description,
            quantity=Decimal(item.quantity),
            unit_price=Decimal(item.unit_price),
            total_price=round2(item.line_total),
        )
        for item in order.items.all().order_by("description", "id")
    )
    return InvoiceView(
        invoice_number=order.display_number,
        created_date=_format_date(order.created_at),
        due_date=_format_date(order.due_date),
        customer_name=order.party.name,
        customer_email=order.party.email,
        subtotal_amount=Decimal(order.subtotal_amount),
        tax_amount=Decimal(order.tax_amount),
        tax_summary=order.tax_summary,
        items=items,
        currency=currency,
        total_amount=Decimal(order.total_amount),
    )
