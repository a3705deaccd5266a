"""
OrderDesk Order Lifecycle Engine - Invoice Builder
==================================================
Assembles a new order aggregate (header + lines) from a classified intent.

Steps:
    1. Resolve the party (default customer if unnamed; auto-create allowed)
    2. Resolve the default organization (fatal if missing)
    3. Resolve every line item's product (any miss aborts the whole order)
    4. subtotal = Σ quantity × unit_price
    5. Tax from the organization's country
    6. Allocate invoice_number / display_number
    7. PENDING, paid 0, balance = total

The builder does not persist. It must run inside the caller's transaction,
because numbering and on-demand party creation write rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from core.catalog.models import Product
from core.catalog.service import LookupResolver
from core.errors import InvalidPayloadError, ProductNotFoundError
from core.orders.models import InvoiceItem, Order, OrderStatus
from core.orders.numbering import OrderNumberingService
from core.tax.calculator import TaxCalculator, round2
from core.time.clock import Clock
from engines.order_lifecycle.commands import ClassifiedIntent, LineItemRequest


@dataclass(frozen=True)
class OrderDraft:
    """A fully populated, not-yet-persisted order aggregate."""
    order: Order
    items: tuple[InvoiceItem, ...]

    def persist(self) -> Order:
        self.order.save(force_insert=True)
        for item in self.items:
            item.order = self.order
        InvoiceItem.objects.bulk_create(self.items)
        return self.order


class InvoiceBuilder:

    def __init__(
        self,
        *,
        resolver: LookupResolver,
        tax_calculator: TaxCalculator,
        numbering: OrderNumberingService,
        clock: Clock,
    ):
        self._resolver = resolver
        self._tax_calculator = tax_calculator
        self._numbering = numbering
        self._clock = clock

    def build_order(self, intent: ClassifiedIntent) -> OrderDraft:
        party = self._resolver.resolve_party(intent.party_name, allow_create=True)
        organization = self._resolver.default_organization()
        lines = self._resolve_lines(intent.line_items)

        subtotal = round2(
            sum(
                (quantity * Decimal(product.unit_price) for product, quantity in lines),
                Decimal(0),
            )
        )
        tax = self._tax_calculator.calculate(organization.country, subtotal)
        number = self._numbering.next_number()

        order = Order(
            invoice_number=number.invoice_number,
            display_number=number.display_number,
            intent=intent.intent,
            status=OrderStatus.PENDING,
            subtotal_amount=subtotal,
            tax_amount=tax.tax_amount,
            tax_summary=tax.summary,
            total_amount=tax.total,
            paid_amount=Decimal("0.00"),
            balance_amount=tax.total,
            due_date=intent.due_date,
            created_at=self._clock.now_utc(),
            party=party,
            organization=organization,
        )
        order.check_amounts()
        items = tuple(
            InvoiceItem(
                order=order,
                product=product,
                description=product.name,
                quantity=quantity,
                unit_price=product.unit_price,
            )
            for product, quantity in lines
        )
        return OrderDraft(order=order, items=items)

    def _resolve_lines(
        self,
        line_items: tuple[LineItemRequest, ...],
    ) -> list[tuple[Product, Decimal]]:
        lines: list[tuple[Product, Decimal]] = []
        for line in line_items:
            if line.quantity <= 0:
                raise InvalidPayloadError(
                    f"Quantity for {line.product_name} must be greater than zero."
                )
            product = self._resolver.resolve_product(line.product_name)
            if product is None:
                raise ProductNotFoundError(line.product_name)
            lines.append((product, line.quantity))
        return lines
