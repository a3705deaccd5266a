"""
OrderDesk Documents - Generator Provider
========================================
Protocol + implementations for the invoice document collaborator.

Doctrine:
- The generator is a dependency injection point (testable, swappable).
- It is called AFTER the invoicing transaction commits; it never runs
  while order or product rows are locked.
- It returns an opaque document reference (URL) for the response.
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Protocol

from core.documents.invoice_view import InvoiceView
from core.documents.renderer import render_invoice_html

logger = logging.getLogger("orderdesk.documents")

_SAFE_NUMBER = re.compile(r"^[A-Za-z0-9_-]+$")


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class DocumentGenerator(Protocol):
    def generate(self, view: InvoiceView) -> str:
        """Render the invoice and return a retrievable document reference."""
        ...


def document_path(output_dir: str | Path, display_number: str) -> Path:
    """Location of the rendered invoice for ``display_number``."""
    number = str(display_number).strip().upper()
    if not _SAFE_NUMBER.match(number):
        raise ValueError(f"'{display_number}' is not a valid order number.")
    return Path(output_dir) / f"invoice_{number}.html"


def document_url(base_url: str, display_number: str) -> str:
    return f"{base_url.rstrip('/')}/view/{display_number}"


# ---------------------------------------------------------------------------
# HTML file generator
# ---------------------------------------------------------------------------

class HtmlInvoiceDocumentGenerator:
    """Writes rendered invoices to a directory served by the view endpoint."""

    def __init__(self, *, output_dir: str | Path, base_url: str):
        self._output_dir = Path(output_dir)
        self._base_url = base_url

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def generate(self, view: InvoiceView) -> str:
        path = document_path(self._output_dir, view.invoice_number)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_invoice_html(view), encoding="utf-8")
        logger.info(f"Rendered invoice {view.invoice_number} to {path}.")
        return document_url(self._base_url, view.invoice_number)


# ---------------------------------------------------------------------------
# InMemory generator (deterministic, thread-safe for tests)
# ---------------------------------------------------------------------------

class InMemoryDocumentGenerator:
    """Keeps rendered invoices in memory, keyed by display number."""

    def __init__(self, base_url: str = "memory://invoices"):
        self._lock = threading.Lock()
        self._base_url = base_url
        self._documents: dict[str, str] = {}
        self._views: list[InvoiceView] = []

    def generate(self, view: InvoiceView) -> str:
        html_document = render_invoice_html(view)
        with self._lock:
            self._documents[view.invoice_number] = html_document
            self._views.append(view)
        return document_url(self._base_url, view.invoice_number)

    def get_document(self, display_number: str) -> str | None:
        with self._lock:
            return self._documents.get(display_number)

    @property
    def views(self) -> tuple[InvoiceView, ...]:
        with self._lock:
            return tuple(self._views)
