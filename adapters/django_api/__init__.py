"""
OrderDesk Django HTTP adapter.
Thin framework glue over the order lifecycle engine.
"""

from adapters.django_api.wiring import build_engine, reset_engine

__all__ = [
    "build_engine",
    "reset_engine",
]
