"""Request correlation middleware."""

import logging
import uuid

from apps.core.logging import set_correlation_id


logger = logging.getLogger(__name__)

CORRELATION_HEADER = 'HTTP_X_CORRELATION_ID'


class CorrelationIdMiddleware:
    """Binds a correlation id to every request and echoes it back."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        correlation_id = request.META.get(CORRELATION_HEADER) or uuid.uuid4().hex
        request.correlation_id = correlation_id
        set_correlation_id(correlation_id)
        try:
            response = self.get_response(request)
        finally:
            set_correlation_id(None)
        response['X-Correlation-ID'] = correlation_id
        logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
        return response
