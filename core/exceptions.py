"""
Unified API error handling.

Every failure leaves the API as ``{"success": false, "error": "..."}``.
Validation failures additionally carry ``details``, a flat list of
``{"field", "message"}`` pairs with nested field paths joined by dots.
"""
from __future__ import annotations

import logging

from django.db import IntegrityError
from django.db.models import ProtectedError
from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class BadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'


class MailDeliveryError(Exception):
    """Raised by the mailer when a message could not be handed to the backend."""


def flatten_errors(errors, prefix: str = '') -> list[dict[str, str]]:
    """Flatten DRF's nested error structure into ``[{field, message}]``."""
    out: list[dict[str, str]] = []
    if isinstance(errors, dict):
        for key, value in errors.items():
            field = str(key) if key != 'non_field_errors' else ''
            path = f'{prefix}.{field}' if prefix and field else (prefix or field)
            out.extend(flatten_errors(value, path))
    elif isinstance(errors, list):
        for index, value in enumerate(errors):
            if isinstance(value, (dict, list)):
                out.extend(flatten_errors(value, f'{prefix}.{index}' if prefix else str(index)))
            else:
                out.append({'field': prefix, 'message': str(value)})
    else:
        out.append({'field': prefix, 'message': str(errors)})
    return out


def _message(detail) -> str:
    if isinstance(detail, dict):
        return str(detail.get('detail') or next(iter(detail.values()), ''))
    if isinstance(detail, list):
        return str(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        return Response({'success': False, 'error': 'Duplicate key or constraint violation'}, status=409)
    if isinstance(exc, ProtectedError):
        return Response({'success': False, 'error': 'Resource is still referenced and cannot be deleted'}, status=409)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('Unhandled error in %s', context.get('view') if context else None)
        return Response({'success': False, 'error': str(exc) or 'Internal server error'}, status=500)

    if isinstance(exc, ValidationError):
        payload = {'success': False, 'error': 'Validation failed', 'details': flatten_errors(exc.detail)}
    elif isinstance(exc, NotAuthenticated):
        payload = {'success': False, 'error': 'Authentication required. Please provide a valid token.'}
    elif isinstance(exc, InvalidToken):
        payload = {'success': False, 'error': 'Invalid or expired token. Please login again.'}
    elif isinstance(exc, AuthenticationFailed):
        payload = {'success': False, 'error': _message(exc.detail) or 'Invalid or expired token. Please login again.'}
    else:
        payload = {'success': False, 'error': _message(resp.data.get('detail', resp.data) if isinstance(resp.data, dict) else resp.data)}
    return Response(payload, status=resp.status_code, headers=_auth_headers(resp))


def _auth_headers(resp) -> dict[str, str]:
    header = resp.headers.get('WWW-Authenticate') if hasattr(resp, 'headers') else None
    return {'WWW-Authenticate': header} if header else {}


def not_found_view(request, exception=None):
    return JsonResponse({'success': False, 'error': 'Route not found'}, status=404)


def server_error_view(request):
    return JsonResponse({'success': False, 'error': 'Something went wrong!'}, status=500)
