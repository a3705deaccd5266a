"""
OrderDesk Tax - Public API
==========================
"""

from core.tax.calculator import TaxCalculator, TaxResult, compute_tax, round2

__all__ = [
    "TaxCalculator",
    "TaxResult",
    "compute_tax",
    "round2",
]
