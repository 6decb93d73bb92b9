from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotAcceptable,
    NotFound,
    ParseError,
    Throttled,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

SERVER_ERROR_MESSAGE = "Something went wrong"


@dataclass(frozen=True)
class ErrorShape:
    code: str
    message: str
    keep_details: bool = False
    hint: Optional[str] = None


# Checked in order; the first matching exception type wins.
DRF_ERROR_SHAPES: Tuple[Tuple[Tuple[Type[Exception], ...], ErrorShape], ...] = (
    ((ValidationError,), ErrorShape("VALIDATION_ERROR", "Validation failed", keep_details=True)),
    ((ParseError,), ErrorShape("VALIDATION_ERROR", "Malformed request", keep_details=True)),
    ((NotFound, Http404), ErrorShape("NOT_FOUND", "Resource not found")),
    (
        (MethodNotAllowed,),
        ErrorShape(
            "METHOD_NOT_ALLOWED",
            "Method not allowed",
            hint="This endpoint is read-only; use GET.",
        ),
    ),
    ((NotAcceptable,), ErrorShape("NOT_ACCEPTABLE", "Not acceptable")),
    ((UnsupportedMediaType,), ErrorShape("UNSUPPORTED_MEDIA_TYPE", "Unsupported media type")),
)


class ApplicationError(Exception):
    """
    Domain-level error raised from services, gateways or views.

    Args:
        code: Machine readable error code.
        message: Human readable explanation of the error.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
        hint: Optional hint for remediation.
        extra: Optional additional machine readable fields.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.extra = extra

    @property
    def is_server_error(self) -> bool:
        return (self.status_code or 0) >= 500 or self.code.upper() == "SERVER_ERROR"

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF ``EXCEPTION_HANDLER`` returning the ``{"error": {...}}`` envelope for
    every failure raised inside an API view.
    """

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        if exc.is_server_error:
            cause = exc.__cause__
            bound_logger.error(
                "Application error reached the API boundary",
                code=exc.code,
                status=exc.status_code,
                cause=cause.__class__.__name__ if cause else None,
            )
        else:
            bound_logger.info(
                "Handled application error",
                code=exc.code,
                status=exc.status_code,
            )
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_django_validation_detail(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        "SERVER_ERROR",
        SERVER_ERROR_MESSAGE,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=view.__class__.__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(exc: Exception, response: Response, bound_logger) -> Response:
    status_code = response.status_code
    payload = response.data

    if status_code >= 500:
        bound_logger.error("Converted server error", status=status_code)
        return error_response("SERVER_ERROR", SERVER_ERROR_MESSAGE, http_status=status_code)

    if isinstance(exc, Throttled):
        wait = exc.wait
        bound_logger.info("Request throttled", wait=wait)
        return error_response(
            "TOO_MANY_REQUESTS",
            _message_from(payload, "Request was throttled"),
            {"retryAfter": wait} if wait is not None else None,
            http_status=status_code,
            hint="Wait before retrying this request." if wait is not None else None,
        )

    shape = _shape_for(exc)
    if shape is None:
        shape = ErrorShape("UNKNOWN_ERROR", "Request failed", keep_details=isinstance(payload, (dict, list)))
    details = payload if shape.keep_details and payload else None

    bound_logger.info("Converted API exception", code=shape.code, status=status_code)
    return error_response(
        shape.code,
        _message_from(payload, shape.message),
        details,
        http_status=status_code,
        hint=shape.hint,
    )


def _shape_for(exc: Exception) -> Optional[ErrorShape]:
    for types_, shape in DRF_ERROR_SHAPES:
        if isinstance(exc, types_):
            return shape
    return None


def _django_validation_detail(exc: DjangoValidationError) -> Any:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return list(exc.messages)


def _message_from(payload: Any, fallback: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = ["ApplicationError", "global_exception_handler"]
