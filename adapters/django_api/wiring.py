"""
OrderDesk Django Adapter Wiring
===============================
Constructs the OrderLifecycleEngine for the HTTP adapter.

This module is adapter-only glue:
- settings come from django.conf.settings.ORDERDESK
- invoices are rendered as HTML files under DOCUMENT_OUTPUT_DIR
- one engine per process, built on first use
"""

from __future__ import annotations

import threading

from core.documents.generator import HtmlInvoiceDocumentGenerator
from engines.order_lifecycle.config import EngineSettings
from engines.order_lifecycle.services import OrderLifecycleEngine


_ENGINE_LOCK = threading.Lock()
_ENGINE: OrderLifecycleEngine | None = None


def _create_engine() -> OrderLifecycleEngine:
    settings = EngineSettings.from_django_settings()
    return OrderLifecycleEngine(
        settings=settings,
        document_generator=HtmlInvoiceDocumentGenerator(
            output_dir=settings.document_output_dir,
            base_url=settings.document_base_url,
        ),
    )


def build_engine() -> OrderLifecycleEngine:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _ENGINE
    with _ENGINE_LOCK:
        if _ENGINE is None:
            _ENGINE = _create_engine()
        return _ENGINE


def reset_engine() -> None:
    """Drop the cached engine so the next request rebuilds it from settings."""
    global _ENGINE
    with _ENGINE_LOCK:
        _ENGINE = None
