from django.http import HttpResponse
from django.test import RequestFactory

from apps.core.logging import CorrelationIdFilter, get_correlation_id, mask_cnic
from apps.core.middleware import CorrelationIdMiddleware


def test_generates_and_echoes_correlation_id():
    seen = {}

    def get_response(request):
        seen['id'] = get_correlation_id()
        return HttpResponse('ok')

    response = CorrelationIdMiddleware(get_response)(RequestFactory().get('/api/health'))
    assert response['X-Correlation-ID'] == seen['id']
    assert len(seen['id']) == 32
    assert get_correlation_id() is None


def test_keeps_incoming_correlation_id():
    middleware = CorrelationIdMiddleware(lambda request: HttpResponse('ok'))
    request = RequestFactory().get('/api/health', HTTP_X_CORRELATION_ID='abc-123')
    response = middleware(request)
    assert response['X-Correlation-ID'] == 'abc-123'
    assert request.correlation_id == 'abc-123'


def test_correlation_filter_defaults_to_unknown():
    record = SimpleRecord()
    assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == 'unknown'


def test_mask_cnic():
    assert mask_cnic('3520112345671') == '*********5671'
    assert mask_cnic(None) == '-'


class SimpleRecord:
    pass
