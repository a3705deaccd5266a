"""
OrderDesk Orders - Order Aggregate
==================================
Order (header) + InvoiceItem (lines) + OrderSequence (number counter).

Invariants at every committed state:
- total_amount == subtotal_amount + tax_amount
- balance_amount == total_amount - paid_amount
- invoice_number is unique and strictly increasing
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models

from core.catalog.models import Organization, Party, Product
from core.errors import InvalidPayloadError

AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 2
AMOUNT_MAX = Decimal(10) ** (AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES) - Decimal("0.01")


def ensure_storable(value, *, field_name: str) -> Decimal:
    """Reject a value that does not fit a DecimalField(12, 2) column."""
    value = Decimal(value)
    if abs(value) > AMOUNT_MAX:
        raise InvalidPayloadError(
            f"{field_name} {value} exceeds the maximum of {AMOUNT_MAX}."
        )
    return value


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    DELIVERED = "DELIVERED", "Delivered"
    INVOICED = "INVOICED", "Invoiced"
    PARTIALLY_PAID = "PARTIALLY_PAID", "Partially paid"
    PAID = "PAID", "Paid"

    @classmethod
    def rank(cls, status: str) -> int:
        return _STATUS_ORDER.index(status)


_STATUS_ORDER = (
    OrderStatus.PENDING,
    OrderStatus.DELIVERED,
    OrderStatus.INVOICED,
    OrderStatus.PARTIALLY_PAID,
    OrderStatus.PAID,
)


_AMOUNT_FIELDS = (
    "subtotal_amount",
    "tax_amount",
    "total_amount",
    "paid_amount",
    "balance_amount",
)


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice_number = models.PositiveIntegerField(unique=True)
    display_number = models.CharField(max_length=32, unique=True)
    intent = models.CharField(max_length=64)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    subtotal_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax_summary = models.CharField(max_length=64, default="", blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    balance_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    due_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField()
    fulfilled_at = models.DateTimeField(null=True, blank=True)
    invoiced_at = models.DateTimeField(null=True, blank=True)
    party = models.ForeignKey(
        Party,
        on_delete=models.PROTECT,
        related_name="orders",
        db_column="party_id",
    )
    organization = models.ForeignKey(
        Organization,
        on_delete=models.PROTECT,
        related_name="orders",
        db_column="org_id",
    )

    class Meta:
        db_table = "orderdesk_orders"
        ordering = ["invoice_number"]

    def __str__(self) -> str:
        return f"{self.display_number} ({self.status})"

    def advance_status(self, target: str) -> bool:
        """Move status forward to ``target``; never backwards. Returns True if changed."""
        if OrderStatus.rank(target) <= OrderStatus.rank(self.status):
            return False
        self.status = target
        return True

    def check_amounts(self) -> None:
        for field_name in _AMOUNT_FIELDS:
            ensure_storable(getattr(self, field_name), field_name=field_name)

    def apply_payment(self, amount: Decimal) -> None:
        paid = ensure_storable(
            Decimal(self.paid_amount) + amount, field_name="paid_amount",
        )
        balance = ensure_storable(
            Decimal(self.total_amount) - paid, field_name="balance_amount",
        )
        self.paid_amount = paid
        self.balance_amount = balance
        if self.balance_amount <= 0:
            self.status = OrderStatus.PAID
        else:
            self.status = OrderStatus.PARTIALLY_PAID


class InvoiceItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        db_column="order_id",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="invoice_items",
        db_column="product_id",
    )
    description = models.CharField(max_length=255)
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = "orderdesk_invoice_items"
        ordering = ["order_id", "description", "id"]

    def __str__(self) -> str:
        return f"{self.description} x {self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_price)


class OrderSequence(models.Model):
    key = models.CharField(primary_key=True, max_length=64)
    last_number = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "orderdesk_order_sequences"

    def __str__(self) -> str:
        return f"{self.key}={self.last_number}"
