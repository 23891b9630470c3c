"""
API exceptions and the project-wide DRF exception handler.

Every error leaves the API as ``{"error": "<reason>"}`` so the storefront
client can show it directly.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


def first_error_message(detail, path=''):
    """Flatten nested serializer errors to one "field.sub: message" string."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            prefix = f"{path}.{key}" if path else str(key)
            if key == 'non_field_errors':
                prefix = path
            message = first_error_message(value, prefix)
            if message:
                return message
        return 'Validation failed'
    if isinstance(detail, list):
        for index, value in enumerate(detail):
            # Lists of child serializers carry empty dicts for valid entries
            if isinstance(value, dict) and not value:
                continue
            child_path = f"{path}[{index}]" if isinstance(value, (dict, list)) else path
            message = first_error_message(value, child_path)
            if message:
                return message
        return ''
    return f"{path}: {detail}" if path else str(detail)


def storefront_exception_handler(exc, context):
    """
    Render DRF exceptions as ``{"error": ...}`` and turn anything else into a
    logged, generic 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response({'error': 'Server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError) and isinstance(exc.detail, dict):
        response.data = {'error': first_error_message(exc.detail), 'details': exc.detail}
    elif isinstance(exc, ValidationError) and isinstance(exc.detail, list):
        response.data = {'error': ' '.join(str(item) for item in exc.detail)}
    elif isinstance(exc, APIException):
        response.data = {'error': str(exc.detail)}

    return response
