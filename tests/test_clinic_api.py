import json

import pytest
import requests

from clinic_desk.clients.clinic_api import ClinicApiClient, ClinicApiError


def make_response(status_code, body=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        response._content = json.dumps(body).encode()
    elif text is not None:
        response._content = text.encode()
    else:
        response._content = b''
    return response


class StubSession(requests.Session):
    def __init__(self, response=None, error=None):
        super().__init__()
        self.response = response
        self.error = error
        self.sent = []

    def request(self, method, url, **kwargs):
        self.sent.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_sends_bearer_token_and_drops_empty_params():
    session = StubSession(make_response(200, {'patients': []}))
    client = ClinicApiClient(base_url='http://clinic.test/api/', token='abc', timeout=3, session=session)

    assert client.get('/patients', params={'page': 1, 'search': '', 'gender': None}) == {'patients': []}

    method, url, kwargs = session.sent[0]
    assert (method, url) == ('GET', 'http://clinic.test/api/patients')
    assert kwargs['params'] == {'page': 1}
    assert kwargs['timeout'] == 3
    assert session.headers['Authorization'] == 'Bearer abc'


def test_empty_body_reads_as_none():
    session = StubSession(make_response(204))
    assert ClinicApiClient(base_url='http://clinic.test', session=session).delete('/monthly-expenses/1') is None


@pytest.mark.parametrize('status_code, body, http_code, message', [
    (404, {'error': 'Medicine not found'}, 404, 'Medicine not found'),
    (400, {'message': 'Invalid data'}, 400, 'Invalid data'),
    (500, {'error': 'Database is down'}, 502, 'Database is down'),
])
def test_backend_errors(status_code, body, http_code, message):
    session = StubSession(make_response(status_code, body))
    client = ClinicApiClient(base_url='http://clinic.test', session=session)
    with pytest.raises(ClinicApiError) as exc_info:
        client.get('/medicines')
    assert exc_info.value.http_code == http_code
    assert exc_info.value.upstream_status == status_code
    assert exc_info.value.message == message


def test_non_json_error_body():
    session = StubSession(make_response(503, text='Service Unavailable'))
    with pytest.raises(ClinicApiError) as exc_info:
        ClinicApiClient(base_url='http://clinic.test', session=session).get('/medicines')
    assert exc_info.value.http_code == 502
    assert exc_info.value.message == 'Service Unavailable'


def test_unreachable_backend():
    session = StubSession(error=requests.ConnectionError('refused'))
    with pytest.raises(ClinicApiError) as exc_info:
        ClinicApiClient(base_url='http://clinic.test', session=session).get('/medicines')
    assert exc_info.value.http_code == 502
    assert exc_info.value.upstream_status is None
