from __future__ import annotations

import json

import pytest

from adapters.django_api import build_engine, reset_engine
from adapters.django_api.responses import error_response, success_response
from adapters.django_api.views import commands_view, invoice_document_view
from core.orders.models import Order, OrderStatus

pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def api_engine(settings, tmp_path, seeded_catalog):
    settings.ORDERDESK = {
        **settings.ORDERDESK,
        "DOCUMENT_OUTPUT_DIR": tmp_path / "invoices",
        "DOCUMENT_BASE_URL": "http://testserver/v1",
    }
    reset_engine()
    yield build_engine()
    reset_engine()


def _post(rf, body):
    raw = body if isinstance(body, (str, bytes)) else json.dumps(body)
    return commands_view(rf.post("/v1/commands", data=raw, content_type="application/json"))


def test_response_envelopes() -> None:
    assert success_response({"a": 1}) == {"ok": True, "data": {"a": 1}}
    assert error_response(code="X", message="boom") == {
        "ok": False,
        "error": {"code": "X", "message": "boom", "details": {}},
    }


def test_engine_is_built_once(api_engine) -> None:
    assert build_engine() is api_engine
    assert api_engine.settings.document_base_url == "http://testserver/v1"


def test_create_sales_order_over_http(rf, api_engine) -> None:
    response = _post(rf, {
        "intent": "CREATE_SALES_ORDER",
        "party_name": "Ryan",
        "line_items": [{"product_name": "kingfisher", "product_quantity": 800}],
    })

    assert response.status_code == 200
    payload = json.loads(response.content)
    assert payload["ok"] is True
    assert payload["data"]["order_reference"] == "SO-1"
    assert payload["data"]["message"].startswith("Created a Sales Order with Order # SO-1.")


def test_lifecycle_failures_are_still_200(rf, api_engine) -> None:
    response = _post(rf, {"intent": "STATUS_CHECK", "order_number": "SO-77"})

    assert response.status_code == 200
    assert json.loads(response.content)["data"] == {
        "order_reference": None,
        "message": "Order SO-77 not found.",
    }


@pytest.mark.parametrize(
    "body",
    [
        "",
        "{not json",
        json.dumps(["CREATE_SALES_ORDER"]),
        json.dumps({"intent": "CREATE_SALES_ORDER", "line_items": "kingfisher"}),
        json.dumps({
            "intent": "CREATE_SALES_ORDER",
            "line_items": [{"product_name": "kingfisher", "quantity": "0.004"}],
        }),
        json.dumps({"intent": "RECORD_PAYMENT", "order_number": "SO-1", "customer_payment_amount": 1e15}),
    ],
)
def test_malformed_body_is_400(rf, api_engine, body) -> None:
    response = _post(rf, body)

    assert response.status_code == 400
    payload = json.loads(response.content)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INVALID_REQUEST"
    assert Order.objects.count() == 0


def test_commands_requires_post(rf, api_engine) -> None:
    response = commands_view(rf.get("/v1/commands"))
    assert response.status_code == 405


def test_invoice_document_is_served(rf, api_engine, tmp_path) -> None:
    _post(rf, {
        "intent": "CREATE_SALES_ORDER",
        "party_name": "Hilton Hotels India",
        "line_items": [{"product_name": "tuborg", "quantity": 2}],
    })
    invoice = json.loads(_post(rf, {"intent": "CREATE_INVOICE", "order_number": "so-1"}).content)

    assert "http://testserver/v1/view/SO-1" in invoice["data"]["message"]
    assert Order.objects.get(display_number="SO-1").status == OrderStatus.INVOICED
    assert (tmp_path / "invoices" / "invoice_SO-1.html").is_file()

    response = invoice_document_view(rf.get("/v1/view/so-1"), "so-1")
    try:
        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/html")
        content = b"".join(response.streaming_content).decode("utf-8")
    finally:
        response.close()
    assert "Invoice SO-1" in content
    assert "Hilton Hotels India" in content


def test_missing_document_is_404(rf, api_engine) -> None:
    response = invoice_document_view(rf.get("/v1/view/SO-5"), "SO-5")
    assert response.status_code == 404
    assert json.loads(response.content)["error"]["code"] == "NOT_FOUND"


def test_invalid_document_number_is_400(rf, api_engine) -> None:
    response = invoice_document_view(rf.get("/v1/view/x"), "..")
    assert response.status_code == 400
