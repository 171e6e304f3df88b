"""
Standardized JSON response helpers.

All API responses follow the envelope:

    Success:  {"success": true,  "<resource>": ..., "message": "..."}
    Error:    {"success": false, "code": "...", "message": "...", "errors": [...]}

The resource key is named after what is returned (``employee``,
``employees``, ``departments`` ...) so clients can read it directly.
"""

from rest_framework.response import Response
from rest_framework import status


def success_response(message=None, http_status=status.HTTP_200_OK, **payload):
    """Return a successful JSON envelope."""
    body = {'success': True}
    body.update(payload)
    if message:
        body['message'] = message
    return Response(body, status=http_status)


def created_response(message='Created successfully.', **payload):
    return success_response(message=message, http_status=status.HTTP_201_CREATED, **payload)


def deleted_response(message='Deleted successfully.'):
    return success_response(message=message)
