"""
OrderDesk Django Adapter Views
==============================
Pass-through HTTP views over the order lifecycle engine.

    POST /v1/commands              → ClassifiedIntent → ProcessResult
    GET  /v1/view/<order_number>   → rendered invoice HTML
"""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import FileResponse, HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.responses import error_response, success_response
from adapters.django_api.wiring import build_engine
from core.documents.generator import document_path
from core.errors import InvalidPayloadError
from engines.order_lifecycle.commands import ClassifiedIntent

logger = logging.getLogger("orderdesk.http")


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        raise ValueError("Request body is required.")
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


@csrf_exempt
def commands_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        intent = ClassifiedIntent.from_payload(_parse_json_body(request))
    except (ValueError, InvalidPayloadError) as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    result = build_engine().process(intent)
    logger.info(f"{intent.intent} → {result.order_reference}")
    return JsonResponse(success_response(result.to_dict()))


def invoice_document_view(request: HttpRequest, order_number: str):
    if request.method != "GET":
        return _method_not_allowed()

    engine = build_engine()
    try:
        path = document_path(engine.settings.document_output_dir, order_number)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    if not path.is_file():
        return _json_error(
            "NOT_FOUND",
            f"No invoice document for order {order_number}.",
            status=404,
        )
    return FileResponse(path.open("rb"), content_type="text/html; charset=utf-8")
