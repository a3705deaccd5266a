"""
OrderDesk Orders - Numbering Service
====================================
Sequential order number allocation backed by an explicit counter row.

Doctrine:
- The counter is a dedicated OrderSequence row, locked with
  SELECT ... FOR UPDATE; numbers never come from scanning orders.
- On first use the counter is seeded from MAX(invoice_number) so orders
  written before the counter existed are never renumbered.
- Allocation must run inside the caller's transaction: the row lock is held
  until the order insert commits, so concurrent creators serialize here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.db.models import Max

from core.orders.models import Order, OrderSequence

logger = logging.getLogger("orderdesk.numbering")

SALES_ORDER_SEQUENCE = "SALES_ORDER"


# ---------------------------------------------------------------------------
# NumberingPolicy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberingPolicy:
    """
    Declares how order numbers are displayed.

    Fields:
        sequence_key: OrderSequence row backing this policy
        prefix: prepended before the sequence (e.g. "SO-")
        padding: minimum digit width for the sequence number (1 → "7")
        start_at: first sequence number issued on an empty store
    """
    sequence_key: str = SALES_ORDER_SEQUENCE
    prefix: str = "SO-"
    padding: int = 1
    start_at: int = 1

    def __post_init__(self):
        if not self.sequence_key or not isinstance(self.sequence_key, str):
            raise ValueError("sequence_key must be a non-empty string.")
        if not isinstance(self.prefix, str):
            raise ValueError("prefix must be a string.")
        if not isinstance(self.padding, int) or self.padding < 1:
            raise ValueError("padding must be int >= 1.")
        if not isinstance(self.start_at, int) or self.start_at < 1:
            raise ValueError("start_at must be int >= 1.")

    def format_number(self, sequence: int) -> str:
        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be int >= 1.")
        return f"{self.prefix}{str(sequence).zfill(self.padding)}"


@dataclass(frozen=True)
class AllocatedNumber:
    invoice_number: int
    display_number: str


# ---------------------------------------------------------------------------
# Numbering service
# ---------------------------------------------------------------------------

class OrderNumberingService:

    def __init__(self, policy: NumberingPolicy | None = None):
        self._policy = policy or NumberingPolicy()

    def next_number(self) -> AllocatedNumber:
        """Allocate the next order number. Requires an open transaction."""
        if not transaction.get_connection().in_atomic_block:
            raise RuntimeError(
                "Order numbers must be allocated inside transaction.atomic()."
            )

        sequence = self._locked_sequence()
        next_value = max(sequence.last_number + 1, self._policy.start_at)
        sequence.last_number = next_value
        sequence.save(update_fields=["last_number", "updated_at"])

        return AllocatedNumber(
            invoice_number=next_value,
            display_number=self._policy.format_number(next_value),
        )

    def _locked_sequence(self) -> OrderSequence:
        key = self._policy.sequence_key
        sequence = OrderSequence.objects.select_for_update().filter(key=key).first()
        if sequence is not None:
            return sequence

        current_max = Order.objects.aggregate(value=Max("invoice_number"))["value"] or 0
        try:
            with transaction.atomic():
                OrderSequence.objects.create(key=key, last_number=current_max)
            logger.info(f"Initialized order sequence '{key}' at {current_max}.")
        except IntegrityError:
            # Another transaction created the row first.
            pass
        return OrderSequence.objects.select_for_update().get(key=key)
