"""
OrderDesk Core - Error Taxonomy
===============================
Errors raised inside lifecycle transactions.

Every error carries a human-readable message. The lifecycle engine catches
them at its boundary and returns the message; none of them crosses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


class OrderLifecycleError(Exception):
    """Base error for all order lifecycle operations."""
    pass


class NotFoundError(OrderLifecycleError):
    """A party, organization, order or product is absent where required."""
    pass


class ProductNotFoundError(NotFoundError):

    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(
            f"Product with name {product_name} not found. "
            f"Please send correct product name."
        )


class OrderNotFoundError(NotFoundError):

    def __init__(self, order_number: str):
        self.order_number = order_number
        super().__init__(f"Order {order_number} not found.")


@dataclass(frozen=True)
class StockShortfall:
    product_name: str
    available: Decimal
    required: Decimal


class InsufficientStockError(OrderLifecycleError):
    """Fulfillment needs more stock than is on hand for one or more products."""

    def __init__(self, shortfalls: tuple[StockShortfall, ...]):
        self.shortfalls = shortfalls
        details = ", ".join(
            f"{s.product_name} (available {s.available}, required {s.required})"
            for s in shortfalls
        )
        super().__init__(f"Insufficient stock: {details}.")


class InvalidPayloadError(OrderLifecycleError, ValueError):
    """The command is missing or malforms a field the intent depends on."""
    pass


class FatalConfigurationError(OrderLifecycleError):
    """
    Default organization or default customer is missing.

    This is a configuration fault, not a user error: the system is unusable
    until the catalog is provisioned.
    """

    def __init__(self, entity: str, name: str):
        self.entity = entity
        self.name = name
        super().__init__(f"Default {entity} '{name}' is not provisioned.")
