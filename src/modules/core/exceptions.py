"""Project-wide DRF exception handler.

Every error response has the same envelope::

    {
        "type": "validation_error" | "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "field" | null}]
    }

Views that translate domain exceptions build their payloads with
``error_response`` so domain and framework errors look alike.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def error_response(
    detail: str,
    code: str,
    http_status: int,
    attr: Optional[str] = None,
    **extra: Any,
) -> Response:
    """Build a single-error response in the standard envelope."""
    error: Dict[str, Any] = {"code": code, "detail": detail, "attr": attr, **extra}
    body: Dict[str, Any] = {
        "type": "server_error" if http_status >= 500 else "client_error",
        "errors": [error],
    }
    return Response(body, status=http_status)


def standard_exception_handler(exc: Exception, context: Dict[str, Any]):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        error_type = "validation_error"
        errors = _flatten_validation_errors(exc.detail)
    else:
        error_type = (
            "server_error"
            if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
            else "client_error"
        )
        detail = getattr(exc, "detail", str(exc))
        code = detail.code if hasattr(detail, "code") else "error"
        errors = [{"code": code, "detail": str(detail), "attr": None}]

    logger.info(
        "api.error_response",
        status_code=response.status_code,
        error_type=error_type,
        codes=[error["code"] for error in errors],
    )
    response.data = {"type": error_type, "errors": errors}
    return response


def _flatten_validation_errors(
    detail: Any, attr: Optional[str] = None
) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            child = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                child = attr
            errors.extend(_flatten_validation_errors(value, child))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            child = attr
            if isinstance(value, (dict, list)):
                child = f"{attr}.{index}" if attr else str(index)
            errors.extend(_flatten_validation_errors(value, child))
        return errors
    code = getattr(detail, "code", "invalid")
    return [{"code": code, "detail": str(detail), "attr": attr}]
