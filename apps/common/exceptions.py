"""
Error taxonomy and the DRF exception handler that renders it.

Every error leaves the API as ``{"error": <message>}``; validation failures
also carry the per-field ``errors`` object.
"""
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler
import logging

logger = logging.getLogger(__name__)


class BadRequest(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad Request'
    default_code = 'bad_request'


class Unauthenticated(exceptions.AuthenticationFailed):
    default_detail = 'Unauthorized'
    default_code = 'unauthenticated'


class Forbidden(exceptions.APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden'
    default_code = 'forbidden'


class NotFound(exceptions.APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not Found'
    default_code = 'not_found'


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class Gone(exceptions.APIException):
    status_code = status.HTTP_410_GONE
    default_detail = 'Gone'
    default_code = 'gone'


# Messages used for DRF's own exceptions
STATUS_MESSAGES = {
    status.HTTP_400_BAD_REQUEST: 'Bad Request',
    status.HTTP_401_UNAUTHORIZED: 'Unauthorized',
    status.HTTP_403_FORBIDDEN: 'Forbidden',
    status.HTTP_404_NOT_FOUND: 'Not Found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'Method Not Allowed',
    status.HTTP_409_CONFLICT: 'Conflict',
    status.HTTP_410_GONE: 'Gone',
    status.HTTP_429_TOO_MANY_REQUESTS: 'Too Many Requests',
}


def first_error_message(detail):
    """Flatten a DRF error detail (dict, list or string) into one readable message."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = first_error_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f'{field}: {message}'
        return None
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else None
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Render every API error as ``{"error": message}``.

    Database integrity violations (duplicate utorid, duplicate email, ...)
    surface as 409 instead of a 500.
    """
    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error in {context['view'].__class__.__name__}: {exc}")
        return Response({'error': 'Conflict'}, status=status.HTTP_409_CONFLICT)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        message = first_error_message(exc.detail) or 'Bad Request'
        response.data = {'error': message, 'errors': exc.detail}
        logger.info(f"Validation error: {message}")
        return response

    if isinstance(exc, Http404):
        message = 'Not Found'
    elif isinstance(exc, (BadRequest, Forbidden, NotFound, Conflict, Gone, Unauthenticated)):
        message = str(exc.detail)
    else:
        message = STATUS_MESSAGES.get(response.status_code, str(getattr(exc, 'detail', 'Error')))

    if response.status_code >= 500:
        logger.error(f"API Exception: {exc}", exc_info=True)
    else:
        logger.info(f"API error {response.status_code}: {message}")

    response.data = {'error': message}
    return response
