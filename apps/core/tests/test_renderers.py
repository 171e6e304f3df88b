import json
from types import SimpleNamespace

from rest_framework.response import Response

from apps.core.renderers import StandardJSONRenderer


def _render(data, status_code=200, method='GET'):
    context = {
        'response': Response(status=status_code),
        'request': SimpleNamespace(method=method),
    }
    return json.loads(StandardJSONRenderer().render(data, renderer_context=context))


def test_wrapped_payload_passes_through():
    payload = {'success': True, 'employees': [], 'message': 'OK'}
    assert _render(payload) == payload


def test_raw_payload_is_wrapped():
    body = _render({'id': 1}, status_code=201, method='POST')
    assert body == {'success': True, 'data': {'id': 1}, 'message': 'Created successfully.'}


def test_raw_error_is_wrapped():
    body = _render({'detail': 'Method "TRACE" not allowed.'}, status_code=405)
    assert body['success'] is False
    assert body['message'] == 'Method "TRACE" not allowed.'


def test_empty_body():
    assert _render(None) == {'success': True, 'message': 'OK'}
