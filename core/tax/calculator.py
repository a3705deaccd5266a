"""
OrderDesk Tax - Calculator
==========================
Maps (country, subtotal) to {rate, tax_amount, total, tax_type}.

Rules:
- Rate is a percentage looked up from TaxConfig by country.
- Missing configuration is not an error: rate 0, type "N/A".
- Rounding is half-up to 2 decimal places, applied once on the totals,
  never per line item.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from core.catalog.models import TaxConfig

NO_TAX_TYPE = "N/A"
_CENT = Decimal("0.01")


def round2(value: Any) -> Decimal:
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class TaxResult:
    rate: Decimal
    tax_amount: Decimal
    total: Decimal
    tax_type: str

    @property
    def summary(self) -> str:
        return f"{self.tax_type} @ {round2(self.rate)}%"


def compute_tax(*, rate: Any, tax_type: str, subtotal: Any) -> TaxResult:
    rate = Decimal(rate)
    subtotal = Decimal(subtotal)
    tax_amount = round2(subtotal * rate / Decimal(100))
    return TaxResult(
        rate=rate,
        tax_amount=tax_amount,
        total=round2(subtotal + tax_amount),
        tax_type=tax_type,
    )


class TaxCalculator:
    """Per-country tax lookup over TaxConfig records."""

    def calculate(self, country: str | None, subtotal: Any) -> TaxResult:
        config = None
        if country:
            config = TaxConfig.objects.filter(country=country.strip().upper()).first()
        if config is None:
            return compute_tax(rate=0, tax_type=NO_TAX_TYPE, subtotal=subtotal)
        return compute_tax(
            rate=config.rate,
            tax_type=config.tax_type,
            subtotal=subtotal,
        )
