"""
OrderDesk Catalog - Name Normalization
======================================
Single normalization step for name-based identity.

The same function fills ``name_key`` columns on save and builds lookup keys
on read, so a name written once is always found again.
"""

from __future__ import annotations

from typing import Any


def normalize_name(value: Any) -> str:
    """Trim, collapse inner whitespace and casefold. ``None`` -> ``""``."""
    if value is None:
        return ""
    return " ".join(str(value).split()).casefold()
