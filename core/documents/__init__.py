"""
OrderDesk Documents - Public API
================================
"""

from core.documents.generator import (
    DocumentGenerator,
    HtmlInvoiceDocumentGenerator,
    InMemoryDocumentGenerator,
    document_path,
    document_url,
)
from core.documents.invoice_view import (
    InvoiceView,
    InvoiceViewItem,
    build_invoice_view,
)
from core.documents.renderer import render_invoice_html

__all__ = [
    "DocumentGenerator",
    "HtmlInvoiceDocumentGenerator",
    "InMemoryDocumentGenerator",
    "InvoiceView",
    "InvoiceViewItem",
    "build_invoice_view",
    "document_path",
    "document_url",
    "render_invoice_html",
]
