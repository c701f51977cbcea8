"""
DRF exception handler producing the failure envelope.

Application exceptions carry their own status code; DRF and Django
exceptions are mapped onto the same shape. Anything unexpected becomes a
500 with the error message (plus a trace when DEBUG is on).
"""
import logging
import traceback

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationException
from .responses import error_response

logger = logging.getLogger(__name__)


def _flatten_message(detail):
    """Pick a readable top-level message out of DRF error details"""
    if isinstance(detail, dict):
        for field, value in detail.items():
            inner = _flatten_message(value)
            if field in ('non_field_errors', 'detail'):
                return inner
            return f"{field}: {inner}"
    if isinstance(detail, (list, tuple)) and detail:
        return _flatten_message(detail[0])
    return str(detail)


def api_exception_handler(exc, context):
    request = context.get('request')
    request_id = getattr(request, 'request_id', 'N/A') if request else 'N/A'

    if isinstance(exc, BaseApplicationException):
        if exc.status_code >= 500:
            logger.error(f"[{request_id}] {exc.message}", exc_info=exc)
        return error_response(exc.message, status=exc.status_code, errors=exc.details or None)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'error_dict') else {'non_field_errors': exc.messages}
        return error_response("Validation failed", status=status.HTTP_400_BAD_REQUEST, errors=errors)

    if isinstance(exc, IntegrityError):
        logger.warning(f"[{request_id}] Integrity error: {exc}")
        return error_response("Resource already exists", status=status.HTTP_409_CONFLICT)

    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound("Resource not found")
    elif isinstance(exc, DjangoPermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, drf_exceptions.ValidationError):
            message = "Validation failed"
            errors = exc.detail if isinstance(exc.detail, dict) else {'non_field_errors': exc.detail}
        else:
            message = _flatten_message(response.data)
            errors = None
        envelope = error_response(message, status=response.status_code, errors=errors)
        for header, value in response.headers.items():
            envelope[header] = value
        return envelope

    logger.error(f"[{request_id}] Unhandled exception: {type(exc).__name__}: {exc}", exc_info=exc)
    extra = {}
    if settings.DEBUG:
        extra['trace'] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return error_response(
        str(exc) or "Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        **extra,
    )
