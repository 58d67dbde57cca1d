# shared/exceptions.py
"""
DRF EXCEPTION_HANDLER.

모든 오류 응답을 {code, message, errors?} 봉투 형태로 통일한다.
- ValidationError → 400 + 필드별 errors 목록
- 그 외 APIException → 해당 status + detail 을 message 로
- StoreError 및 처리되지 않은 예외 → 500 (로그에만 상세 기록)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Error, validation failed please check again.!"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def flatten_errors(detail: Any, field: str | None = None) -> List[Dict[str, str]]:
    """
    {"venueId": ["must be uuid"], "non_field_errors": [...]} 같은 중첩 구조를
    [{"field": "venueId", "message": "must be uuid"}, ...] 로 평탄화.
    """
    out: List[Dict[str, str]] = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            name = key if field is None else f"{field}.{key}"
            out.extend(flatten_errors(value, name))
    elif isinstance(detail, (list, tuple)):
        for value in detail:
            out.extend(flatten_errors(value, field))
    else:
        out.append({"field": field or "non_field_errors", "message": str(detail)})
    return out


def envelope_exception_handler(exc, context):
    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s: %s", type(view).__name__ if view else "-", exc, exc_info=exc
        )
        return Response(
            {"code": status.HTTP_500_INTERNAL_SERVER_ERROR, "message": INTERNAL_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {
            "code": response.status_code,
            "message": VALIDATION_FAILED_MESSAGE,
            "errors": flatten_errors(exc.detail),
        }
        return response

    data = response.data
    message = data.get("detail") if isinstance(data, dict) else None
    response.data = {
        "code": response.status_code,
        "message": str(message if message is not None else exc),
    }
    return response


__all__ = ["envelope_exception_handler", "flatten_errors", "VALIDATION_FAILED_MESSAGE"]
