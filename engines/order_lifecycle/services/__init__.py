"""
OrderDesk Order Lifecycle Engine - Application Service
======================================================
Intent dispatcher over the order/invoice aggregate.

    CREATE_SALES_ORDER  → build + persist a PENDING order
    CREATE_FULLFILLMENT → all-or-nothing stock decrement, DELIVERED
    CREATE_INVOICE      → INVOICED, then render the invoice document
    RECORD_PAYMENT      → paid += amount, PARTIALLY_PAID | PAID
    CHECK_INVENTORY     → read-only stock levels
    STATUS_CHECK        → read-only order status

Every mutating intent runs in ONE transaction covering order
resolve-or-create, order mutation and product stock. Any lifecycle error
rolls the whole transaction back and comes out of process() as a message.
Document rendering runs after the transaction has committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from django.db import DatabaseError, transaction

from core.catalog.models import Product
from core.catalog.service import LookupResolver
from core.documents.generator import DocumentGenerator
from core.documents.invoice_view import build_invoice_view
from core.errors import (
    FatalConfigurationError,
    InsufficientStockError,
    InvalidPayloadError,
    OrderLifecycleError,
    OrderNotFoundError,
)
from core.orders.models import Order, OrderStatus
from core.orders.numbering import OrderNumberingService
from core.tax.calculator import TaxCalculator, round2
from core.time.clock import Clock, SystemClock
from engines.order_lifecycle.builder import InvoiceBuilder
from engines.order_lifecycle.commands import (
    AUTO_CREATE_INTENTS,
    CHECK_INVENTORY,
    CREATE_FULLFILLMENT,
    CREATE_INVOICE,
    CREATE_SALES_ORDER,
    RECORD_PAYMENT,
    STATUS_CHECK,
    UNKNOWN,
    ClassifiedIntent,
    normalize_order_number,
)
from engines.order_lifecycle.config import EngineSettings
from engines.order_lifecycle.policies import (
    aggregate_requirements,
    find_stock_shortfalls,
)

logger = logging.getLogger("orderdesk.lifecycle")

UNKNOWN_INTENT_MESSAGE = (
    "Sorry, I could not understand that request. "
    "Please mention the order number, customer or product."
)
INVENTORY_GUIDANCE_MESSAGE = (
    "Please tell me which product to check, or give an order number "
    "to check stock for its items."
)
STATUS_GUIDANCE_MESSAGE = "Please provide an order number to check its status."

_FAILURE_PREFIXES = {
    CREATE_SALES_ORDER: "Issue creating order",
    CREATE_FULLFILLMENT: "Could not fulfill order",
    CREATE_INVOICE: "Could not invoice order",
    RECORD_PAYMENT: "Could not record payment",
}


# ══════════════════════════════════════════════════════════════
# RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProcessResult:
    """Response for every intent: prose message plus affected order number."""
    order_reference: Optional[str]
    message: str
    document_reference: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "order_reference": self.order_reference,
            "message": self.message,
        }


@dataclass(frozen=True)
class OrderHandle:
    """An order resolved (or created) inside the current transaction."""
    order: Order
    created: bool


def format_quantity(value: Any) -> str:
    value = Decimal(value)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return str(value.normalize())


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class OrderLifecycleEngine:
    """Order lifecycle engine: dispatches classified intents."""

    def __init__(
        self,
        *,
        settings: EngineSettings,
        document_generator: DocumentGenerator,
        clock: Clock | None = None,
        resolver: LookupResolver | None = None,
        tax_calculator: TaxCalculator | None = None,
        numbering: OrderNumberingService | None = None,
    ):
        self._settings = settings
        self._document_generator = document_generator
        self._clock = clock or SystemClock()
        self._resolver = resolver or LookupResolver(
            default_customer_name=settings.default_customer_name,
            default_organization_name=settings.default_organization_name,
        )
        self._builder = InvoiceBuilder(
            resolver=self._resolver,
            tax_calculator=tax_calculator or TaxCalculator(),
            numbering=numbering or OrderNumberingService(),
            clock=self._clock,
        )
        self._handlers: dict[str, Callable[[ClassifiedIntent], ProcessResult]] = {
            CREATE_SALES_ORDER: self._create_sales_order,
            CREATE_FULLFILLMENT: self._create_fulfillment,
            CREATE_INVOICE: self._create_invoice,
            RECORD_PAYMENT: self._record_payment,
            CHECK_INVENTORY: self._check_inventory,
            STATUS_CHECK: self._status_check,
            UNKNOWN: self._unknown,
        }

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # ── Boundary ──────────────────────────────────────────────

    def process(self, intent: ClassifiedIntent) -> ProcessResult:
        handler = self._handlers.get(intent.intent)
        if handler is None:
            return self._not_implemented(intent)

        try:
            return handler(intent)
        except FatalConfigurationError as exc:
            logger.critical(
                f"Configuration error while processing {intent.intent}: {exc}"
            )
            return ProcessResult(
                order_reference=intent.order_number,
                message=(
                    "OrderDesk is not configured correctly and cannot process "
                    f"requests right now ({exc}). Please contact support."
                ),
            )
        except OrderLifecycleError as exc:
            logger.info(f"{intent.intent} rejected: {exc}")
            prefix = _FAILURE_PREFIXES.get(intent.intent, "Could not process request")
            if intent.order_number and intent.intent != CREATE_SALES_ORDER:
                prefix = f"{prefix} {intent.order_number}"
            return ProcessResult(
                order_reference=intent.order_number,
                message=f"{prefix}: {exc}",
            )
        except (DatabaseError, InvalidOperation) as exc:
            logger.error(
                f"Storage failure while processing {intent.intent}: {exc}",
                exc_info=True,
            )
            return ProcessResult(
                order_reference=intent.order_number,
                message="Something went wrong while saving your request. Please try again.",
            )

    # ── Order resolution ──────────────────────────────────────

    def _find_order(self, order_number: str, *, lock: bool) -> Order | None:
        number = normalize_order_number(order_number)
        if number is None:
            return None
        query = Order.objects.filter(display_number__iexact=number)
        if lock:
            query = query.select_for_update()
        return query.first()

    def _resolve_or_create_order(self, intent: ClassifiedIntent) -> OrderHandle:
        """
        Resolve the referenced order under row lock, or build a new one from
        the payload when no order number was given.

        Must be called inside ``transaction.atomic()``.
        """
        if not intent.order_number:
            if intent.intent not in AUTO_CREATE_INTENTS:
                raise InvalidPayloadError("An order number is required.")
            order = self._builder.build_order(intent).persist()
            logger.info(
                f"{intent.intent}: no order number given, created {order.display_number}."
            )
            return OrderHandle(order=order, created=True)

        order = self._find_order(intent.order_number, lock=True)
        if order is None:
            raise OrderNotFoundError(intent.order_number)
        return OrderHandle(order=order, created=False)

    # ── CREATE_SALES_ORDER ────────────────────────────────────

    def _create_sales_order(self, intent: ClassifiedIntent) -> ProcessResult:
        with transaction.atomic():
            order = self._builder.build_order(intent).persist()

        logger.info(
            f"Sales order {order.display_number} created for {order.party.name}: "
            f"total {order.total_amount}."
        )
        return ProcessResult(
            order_reference=order.display_number,
            message=(
                f"Created a Sales Order with Order # {order.display_number}. "
                f"Use this Order number for further interactions."
            ),
        )

    # ── CREATE_FULLFILLMENT ───────────────────────────────────

    def _create_fulfillment(self, intent: ClassifiedIntent) -> ProcessResult:
        with transaction.atomic():
            handle = self._resolve_or_create_order(intent)
            order = handle.order

            if order.fulfilled_at is not None:
                return ProcessResult(
                    order_reference=order.display_number,
                    message=(
                        f"Order {order.display_number} was already fulfilled. "
                        f"Stock was not changed."
                    ),
                )

            requirements = aggregate_requirements(order.items.all())
            products = self._resolver.lock_products(requirements)
            shortfalls = find_stock_shortfalls(requirements, products)
            if shortfalls:
                raise InsufficientStockError(shortfalls)

            for product_id, quantity in requirements.items():
                product = products[product_id]
                product.current_stock = Decimal(product.current_stock) - quantity
                product.save(update_fields=["current_stock", "updated_at"])

            order.advance_status(OrderStatus.DELIVERED)
            order.fulfilled_at = self._clock.now_utc()
            order.save(update_fields=["status", "fulfilled_at"])

        logger.info(
            f"Order {order.display_number} fulfilled; "
            f"{len(requirements)} product(s) decremented."
        )
        return ProcessResult(
            order_reference=order.display_number,
            message=self._note_created(
                handle,
                f"Order {order.display_number} marked as delivered. "
                f"Status: {order.status}.",
            ),
        )

    # ── CREATE_INVOICE ────────────────────────────────────────

    def _create_invoice(self, intent: ClassifiedIntent) -> ProcessResult:
        with transaction.atomic():
            handle = self._resolve_or_create_order(intent)
            order = handle.order
            if not order.items.exists():
                raise InvalidPayloadError(
                    f"Order {order.display_number} has no line items to invoice."
                )

            order.advance_status(OrderStatus.INVOICED)
            if order.invoiced_at is None:
                order.invoiced_at = self._clock.now_utc()
            order.save(update_fields=["status", "invoiced_at"])
            view = build_invoice_view(order, currency=self._settings.currency)

        logger.info(f"Order {order.display_number} invoiced.")

        try:
            reference = self._document_generator.generate(view)
        except Exception as exc:
            # Status is committed; a rendering failure must not undo it.
            logger.error(
                f"Invoice document generation failed for {order.display_number}: {exc}",
                exc_info=True,
            )
            return ProcessResult(
                order_reference=order.display_number,
                message=self._note_created(
                    handle,
                    f"Order {order.display_number} is invoiced, but the invoice "
                    f"document could not be generated. Please try again later.",
                ),
            )

        return ProcessResult(
            order_reference=order.display_number,
            message=self._note_created(
                handle,
                f"Invoice for order {order.display_number} is ready: {reference}. "
                f"Total due: {self._money(order.balance_amount)}.",
            ),
            document_reference=reference,
        )

    # ── RECORD_PAYMENT ────────────────────────────────────────

    def _record_payment(self, intent: ClassifiedIntent) -> ProcessResult:
        with transaction.atomic():
            handle = self._resolve_or_create_order(intent)
            order = handle.order

            if order.status == OrderStatus.PAID:
                return ProcessResult(
                    order_reference=order.display_number,
                    message=(
                        f"Order {order.display_number} is already fully paid. "
                        f"No payment was recorded."
                    ),
                )

            amount = intent.customer_payment_amount
            if amount is None or amount <= 0:
                raise InvalidPayloadError(
                    "A positive customer_payment_amount is required to record a payment."
                )

            order.apply_payment(round2(amount))
            order.save(update_fields=["paid_amount", "balance_amount", "status"])

        logger.info(
            f"Payment of {round2(amount)} recorded on {order.display_number}; "
            f"status {order.status}, balance {order.balance_amount}."
        )
        return ProcessResult(
            order_reference=order.display_number,
            message=self._note_created(
                handle,
                f"Recorded payment of {self._money(amount)} for order "
                f"{order.display_number}. Status: {order.status}. "
                f"Balance due: {self._money(order.balance_amount)}.",
            ),
        )

    # ── CHECK_INVENTORY (read-only) ───────────────────────────

    def _check_inventory(self, intent: ClassifiedIntent) -> ProcessResult:
        order_reference = None

        if intent.target_product_name:
            lines = [self._stock_line_by_name(intent.target_product_name)]
        elif intent.order_number:
            order = self._find_order(intent.order_number, lock=False)
            if order is None:
                return ProcessResult(
                    order_reference=None,
                    message=f"Order {intent.order_number} not found.",
                )
            order_reference = order.display_number
            products = {
                item.product_id: item.product
                for item in order.items.select_related("product")
            }
            if not products:
                return ProcessResult(
                    order_reference=order_reference,
                    message=f"Order {order_reference} has no line items.",
                )
            lines = [self._stock_line(product) for product in products.values()]
        elif intent.line_items:
            names = dict.fromkeys(line.product_name for line in intent.line_items)
            lines = [self._stock_line_by_name(name) for name in names]
        else:
            return ProcessResult(order_reference=None, message=INVENTORY_GUIDANCE_MESSAGE)

        return ProcessResult(
            order_reference=order_reference,
            message="Current stock levels:\n" + "\n".join(lines),
        )

    def _stock_line_by_name(self, name: str) -> str:
        product = self._resolver.resolve_product(name)
        if product is None:
            return f"- {name}: product not found"
        return self._stock_line(product)

    @staticmethod
    def _stock_line(product: Product) -> str:
        return f"- {product.name}: {format_quantity(product.current_stock)} in stock"

    # ── STATUS_CHECK (read-only) ──────────────────────────────

    def _status_check(self, intent: ClassifiedIntent) -> ProcessResult:
        if not intent.order_number:
            return ProcessResult(order_reference=None, message=STATUS_GUIDANCE_MESSAGE)

        order = self._find_order(intent.order_number, lock=False)
        if order is None:
            return ProcessResult(
                order_reference=None,
                message=f"Order {intent.order_number} not found.",
            )
        return ProcessResult(
            order_reference=order.display_number,
            message=(
                f"Order {order.display_number} for {order.party.name} is {order.status}. "
                f"Total: {self._money(order.total_amount)}, "
                f"paid: {self._money(order.paid_amount)}, "
                f"balance: {self._money(order.balance_amount)}."
            ),
        )

    # ── Fallbacks ─────────────────────────────────────────────

    def _unknown(self, intent: ClassifiedIntent) -> ProcessResult:
        return ProcessResult(order_reference=None, message=UNKNOWN_INTENT_MESSAGE)

    def _not_implemented(self, intent: ClassifiedIntent) -> ProcessResult:
        message = f"Functionality not implemented for {intent.intent}"
        if intent.order_number:
            message += f" (order {intent.order_number})"
        return ProcessResult(order_reference=intent.order_number, message=message + ".")

    @staticmethod
    def _note_created(handle: OrderHandle, message: str) -> str:
        if not handle.created:
            return message
        return (
            f"Created a Sales Order with Order # {handle.order.display_number}. {message}"
        )

    def _money(self, amount: Any) -> str:
        return f"{self._settings.currency} {round2(amount)}"
