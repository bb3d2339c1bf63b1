"""
Project-wide exception handler for the REST API.

Every error leaving a view is rendered with the same body shape:

    {"code": "BAD_REQUEST", "message": "Group not found", "status": 404}

Serializer validation failures are reported as 422 Unprocessable Entity and
keep the per-field messages under ``errors``.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: 'UNAUTHORIZED',
    status.HTTP_403_FORBIDDEN: 'FORBIDDEN',
    status.HTTP_404_NOT_FOUND: 'NOT_FOUND',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'METHOD_NOT_ALLOWED',
}


def _first_message(detail, field=None):
    """Flatten a DRF error detail into one human readable line."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            prefix = None if key == 'non_field_errors' else key
            return _first_message(value, field=prefix)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0], field=field) if detail else ''
    if field:
        return f'{field}: {detail}'
    return str(detail)


def _error_code(exc, status_code):
    if isinstance(exc, APIException):
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else exc.default_code
        return str(code).upper()
    return STATUS_CODES.get(status_code, 'ERROR')


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    # Unhandled exceptions fall through to Django's 500 handling
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        response.data = {
            'code': 'BAD_REQUEST',
            'message': _first_message(exc.detail),
            'status': response.status_code,
            'errors': exc.detail,
        }
        return response

    detail = exc.detail if isinstance(exc, APIException) else response.data.get('detail', '')

    if response.status_code >= 500:
        logger.error("API error %s in %s: %s", response.status_code, context.get('view'), detail)

    response.data = {
        'code': _error_code(exc, response.status_code),
        'message': _first_message(detail),
        'status': response.status_code,
    }
    return response
