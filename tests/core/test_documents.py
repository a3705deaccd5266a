from __future__ import annotations

from decimal import Decimal

import pytest

from core.documents import (
    HtmlInvoiceDocumentGenerator,
    InMemoryDocumentGenerator,
    InvoiceView,
    InvoiceViewItem,
    document_path,
    document_url,
    render_invoice_html,
)


def _view(**overrides) -> InvoiceView:
    values = dict(
        invoice_number="SO-3",
        created_date="2026-02-01",
        due_date="2026-02-15",
        customer_name="Spencer & Co. <Suppliers>",
        customer_email="",
        subtotal_amount=Decimal("300.00"),
        tax_amount=Decimal("54.00"),
        tax_summary="GST @ 18.00%",
        items=(
            InvoiceViewItem(
                name="kingfisher",
                quantity=Decimal("2"),
                unit_price=Decimal("150.00"),
                total_price=Decimal("300.00"),
            ),
        ),
        currency="INR",
        total_amount=Decimal("354.00"),
    )
    values.update(overrides)
    return InvoiceView(**values)


class TestRenderer:
    def test_escapes_customer_content(self):
        output = render_invoice_html(_view())
        assert "Spencer &amp; Co. &lt;Suppliers&gt;" in output
        assert "<Suppliers>" not in output

    def test_contains_totals_and_items(self):
        output = render_invoice_html(_view())
        assert "Invoice SO-3" in output
        assert "kingfisher" in output
        assert "INR 354.00" in output
        assert "GST @ 18.00%" in output
        assert "2026-02-15" in output

    def test_is_deterministic(self):
        assert render_invoice_html(_view()) == render_invoice_html(_view())

    def test_empty_items(self):
        assert "No items." in render_invoice_html(_view(items=()))

    def test_rejects_non_view(self):
        with pytest.raises(ValueError):
            render_invoice_html({"invoice_number": "SO-1"})


class TestDocumentLocation:
    def test_path_uses_upper_case_number(self, tmp_path):
        assert document_path(tmp_path, "so-9") == tmp_path / "invoice_SO-9.html"

    def test_path_rejects_traversal(self, tmp_path):
        with pytest.raises(ValueError):
            document_path(tmp_path, "../etc/passwd")

    def test_url(self):
        assert document_url("http://host/v1/", "SO-9") == "http://host/v1/view/SO-9"


class TestGenerators:
    def test_html_generator_writes_file(self, tmp_path):
        generator = HtmlInvoiceDocumentGenerator(
            output_dir=tmp_path / "out",
            base_url="http://localhost:8000/v1",
        )
        reference = generator.generate(_view())

        assert reference == "http://localhost:8000/v1/view/SO-3"
        written = (tmp_path / "out" / "invoice_SO-3.html").read_text(encoding="utf-8")
        assert "Invoice SO-3" in written

    def test_in_memory_generator_keeps_views(self):
        generator = InMemoryDocumentGenerator()
        reference = generator.generate(_view())

        assert reference == "memory://invoices/view/SO-3"
        assert "kingfisher" in generator.get_document("SO-3")
        assert generator.get_document("SO-4") is None
        assert [view.invoice_number for view in generator.views] == ["SO-3"]

    def test_view_to_dict(self):
        data = _view().to_dict()
        assert data["invoice_number"] == "SO-3"
        assert data["items"][0]["name"] == "kingfisher"
