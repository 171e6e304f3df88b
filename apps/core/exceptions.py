"""
Custom Exception Handler for DRF
"""

from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
import logging

logger = logging.getLogger(__name__)


class APIException(Exception):
    """Base exception for API errors"""

    def __init__(self, message, code=None, status_code=status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.code = code or 'error'
        self.status_code = status_code
        super().__init__(message)

    def to_payload(self):
        return {'success': False, 'code': self.code, 'message': self.message}


class ValidationException(APIException):
    """
    One or more field-level violations.

    ``errors`` is a list of ``{'field': ..., 'message': ...}`` dicts; the
    write that raised it was never applied.
    """

    def __init__(self, errors, message='Validation failed'):
        super().__init__(message, code='validation_error', status_code=status.HTTP_400_BAD_REQUEST)
        self.errors = list(errors)

    @property
    def fields(self):
        return [error['field'] for error in self.errors]

    def to_payload(self):
        payload = super().to_payload()
        payload['errors'] = self.errors
        return payload


class ResourceNotFoundException(APIException):
    """Resource not found exception"""

    def __init__(self, resource_type, resource_id=None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message, code='not_found', status_code=status.HTTP_404_NOT_FOUND)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictException(APIException):
    """Conflict exception (e.g., duplicate resource, blocked delete)"""

    def __init__(self, message):
        super().__init__(message, code='conflict', status_code=status.HTTP_409_CONFLICT)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error responses.
    """
    if isinstance(exc, APIException):
        if exc.status_code >= 500:
            logger.error("api_error code=%s message=%s", exc.code, exc.message)
        return Response(exc.to_payload(), status=exc.status_code)

    if isinstance(exc, DRFValidationError):
        errors = flatten_errors(exc.detail)
        return Response(
            {
                'success': False,
                'code': 'validation_error',
                'message': 'Validation failed',
                'errors': errors,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    # Handle 404 before DRF rewrites it into NotFound
    if isinstance(exc, Http404):
        return Response(
            {'success': False, 'code': 'not_found', 'message': 'Not found'},
            status=status.HTTP_404_NOT_FOUND,
        )

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        response.data = {
            'success': False,
            'code': getattr(exc, 'default_code', 'error'),
            'message': get_error_message(response.data),
        }
        return response

    # Handle Django ValidationError
    if isinstance(exc, DjangoValidationError):
        logger.warning("Validation error: %s", exc)
        if hasattr(exc, 'error_dict'):
            errors = flatten_errors(exc.message_dict)
        else:
            errors = [{'field': 'non_field_errors', 'message': m} for m in exc.messages]
        return Response(
            {
                'success': False,
                'code': 'validation_error',
                'message': 'Validation failed',
                'errors': errors,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    # Log unexpected exceptions; the detail never leaves the server
    view = context.get('view')
    logger.exception("Unexpected error in %s: %s", view.__class__.__name__ if view else 'unknown', exc)

    return Response(
        {
            'success': False,
            'code': 'server_error',
            'message': 'An unexpected error occurred.',
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def flatten_errors(detail, prefix=''):
    """Turn a nested DRF/Django error structure into ``[{field, message}]``."""
    errors = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            errors.extend(flatten_errors(value, field))
    elif isinstance(detail, list):
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                errors.extend(flatten_errors(value, f"{prefix}[{index}]"))
            else:
                errors.append({'field': prefix or 'non_field_errors', 'message': str(value)})
    else:
        errors.append({'field': prefix or 'non_field_errors', 'message': str(detail)})
    return errors


def get_error_message(data):
    """Extract a user-friendly error message from response data"""
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        if 'non_field_errors' in data:
            return str(data['non_field_errors'][0])
        # Get first error message
        for key, value in data.items():
            if isinstance(value, list) and value:
                return f"{key}: {value[0]}"
            elif isinstance(value, str):
                return f"{key}: {value}"
    elif isinstance(data, list) and data:
        return str(data[0])
    return str(data)
