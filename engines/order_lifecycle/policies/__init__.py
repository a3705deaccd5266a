"""
OrderDesk Order Lifecycle Engine - Policies
===========================================
Stock validation for fulfillment.

Stock is checked for every product before any product is decremented, so
an order is fulfilled entirely or not at all.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Iterable, Mapping
from decimal import Decimal

from core.catalog.models import Product
from core.errors import StockShortfall
from core.orders.models import InvoiceItem


def aggregate_requirements(items: Iterable[InvoiceItem]) -> dict[uuid.UUID, Decimal]:
    """Total required quantity per product; repeated products are summed."""
    required: dict[uuid.UUID, Decimal] = defaultdict(Decimal)
    for item in items:
        required[item.product_id] += Decimal(item.quantity)
    return dict(required)


def find_stock_shortfalls(
    requirements: Mapping[uuid.UUID, Decimal],
    products: Mapping[uuid.UUID, Product],
) -> tuple[StockShortfall, ...]:
    """
    Return one shortfall per product whose stock is below the requirement.

    ``products`` must hold every product in ``requirements``, read under
    row lock by the caller.
    """
    shortfalls = []
    for product_id, required in requirements.items():
        product = products[product_id]
        available = Decimal(product.current_stock)
        if available < required:
            shortfalls.append(
                StockShortfall(
                    product_name=product.name,
                    available=available,
                    required=required,
                )
            )
    return tuple(sorted(shortfalls, key=lambda s: s.product_name))
