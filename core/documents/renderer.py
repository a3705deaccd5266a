"""
OrderDesk Documents - HTML Invoice Renderer
===========================================
Converts an InvoiceView into a safe, deterministic HTML string.

Doctrine:
- All customer-supplied content is HTML-escaped.
- Same InvoiceView → same HTML output.
- Stdlib only (html.escape).
"""

from __future__ import annotations

import html
from typing import Any

from core.documents.invoice_view import InvoiceView


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _e(value: Any) -> str:
    """HTML-escape any value to a safe string."""
    return html.escape(str(value) if value is not None else "", quote=True)


def _money(currency: str, value: Any) -> str:
    return f"{_e(currency)} {_e(value)}" if currency else _e(value)


def _kv_table(rows: list[tuple[str, Any]], *, css_class: str = "") -> str:
    class_attr = f' class="{_e(css_class)}"' if css_class else ""
    lines = [f"<table{class_attr}>"]
    for label, value in rows:
        lines.append(f"  <tr><th>{_e(label)}</th><td>{value}</td></tr>")
    lines.append("</table>")
    return "\n".join(lines)


def _section(title: str, body: str, *, css_class: str = "") -> str:
    class_attr = f' class="{_e(css_class)}"' if css_class else ""
    return (
        f'<section{class_attr}>\n'
        f'  <h2>{_e(title)}</h2>\n'
        f'{body}\n'
        f'</section>'
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def _render_header(view: InvoiceView) -> str:
    rows = [
        ("Invoice", _e(view.invoice_number)),
        ("Date", _e(view.created_date)),
    ]
    if view.due_date:
        rows.append(("Due", _e(view.due_date)))
    return _section("Invoice", _kv_table(rows, css_class="header-table"), css_class="block-header")


def _render_customer(view: InvoiceView) -> str:
    rows = [("Name", _e(view.customer_name))]
    if view.customer_email:
        rows.append(("Email", _e(view.customer_email)))
    return _section("Bill To", _kv_table(rows), css_class="block-party")


def _render_items(view: InvoiceView) -> str:
    if not view.items:
        return _section("Items", "<p>No items.</p>", css_class="block-item-table")

    rows_html = [
        "<thead><tr><th>Item</th><th>Quantity</th><th>Unit Price</th><th>Total</th></tr></thead>",
        "<tbody>",
    ]
    for item in view.items:
        rows_html.append(
            f"<tr>"
            f"<td>{_e(item.name)}</td>"
            f"<td>{_e(item.quantity)}</td>"
            f"<td>{_money(view.currency, item.unit_price)}</td>"
            f"<td>{_money(view.currency, item.total_price)}</td>"
            f"</tr>"
        )
    rows_html.append("</tbody>")
    body = '<table class="item-table">\n' + "\n".join(rows_html) + "\n</table>"
    return _section("Items", body, css_class="block-item-table")


def _render_totals(view: InvoiceView) -> str:
    rows = [
        ("Subtotal", _money(view.currency, view.subtotal_amount)),
        (view.tax_summary or "Tax", _money(view.currency, view.tax_amount)),
        ("Total", _money(view.currency, view.total_amount)),
    ]
    return _section("Totals", _kv_table(rows, css_class="totals-table"), css_class="block-totals")


_INVOICE_CSS = """\
body { font-family: Arial, Helvetica, sans-serif; font-size: 13px; color: #111; padding: 32px; max-width: 800px; margin: 0 auto; }
h1.doc-title { font-size: 22px; margin-bottom: 24px; border-bottom: 2px solid #333; padding-bottom: 8px; }
section { margin-bottom: 20px; }
section h2 { font-size: 14px; margin-bottom: 8px; border-bottom: 1px solid #ddd; }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: 5px 8px; border: 1px solid #ddd; }
th { background: #f5f5f5; }
.block-totals table { max-width: 360px; margin-left: auto; }
.block-totals tr:last-child td, .block-totals tr:last-child th { font-weight: bold; border-top: 2px solid #333; }
"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_invoice_html(view: InvoiceView) -> str:
    """Render a complete HTML document (DOCTYPE + html + head + body)."""
    if not isinstance(view, InvoiceView):
        raise ValueError("view must be an InvoiceView.")

    body_sections = [
        _render_header(view),
        _render_customer(view),
        _render_items(view),
        _render_totals(view),
    ]
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>Invoice {_e(view.invoice_number)}</title>\n"
        f"<style>\n{_INVOICE_CSS}</style>\n"
        "</head>\n"
        "<body>\n"
        f'<h1 class="doc-title">Invoice {_e(view.invoice_number)}</h1>\n'
        + "\n".join(body_sections)
        + "\n</body>\n</html>\n"
    )
