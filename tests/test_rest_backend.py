import json

import pytest
import requests

from fountaingate.services import BackendError, EntityManager, RestBackend


class FakeResponse:
    def __init__(self, status_code=200, payload=None, headers=None, text='', body=None):
        self.status_code = status_code
        self.url = 'https://school.example.co/rest/v1/'
        self._body = body
        self._payload = payload
        self.headers = headers or {}
        self.text = text
        self.content = body.encode() if body is not None else (b'' if payload is None else b'x')

    def json(self):
        if self._body is not None:
            return json.loads(self._body)
        return self._payload


@pytest.fixture()
def recorder(monkeypatch):
    calls = []
    responses = []

    def fake_request(method, url, params=None, json=None, headers=None, timeout=None):
        calls.append({'method': method, 'url': url, 'params': params, 'json': json,
                      'headers': headers, 'timeout': timeout})
        return responses.pop(0) if responses else FakeResponse(payload=[])

    monkeypatch.setattr('fountaingate.services.rest_backend.requests.request', fake_request)
    return calls, responses


@pytest.fixture()
def rest():
    return RestBackend('https://school.example.co/', 'anon-key', timeout=5)


def test_select_builds_postgrest_query(rest, recorder):
    calls, responses = recorder
    responses.append(FakeResponse(payload=[{'id': '1', 'key': 'mission_text'}]))

    rows = rest.select('site_content', order_by='order_index', limit=5,
                       eq={'section': 'mission'}, in_=('key', ['mission_text', 'vision_text']))

    assert rows == [{'id': '1', 'key': 'mission_text'}]
    call = calls[0]
    assert call['method'] == 'GET'
    assert call['url'] == 'https://school.example.co/rest/v1/site_content'
    assert call['params'] == {
        'select': '*',
        'section': 'eq.mission',
        'key': 'in.("mission_text","vision_text")',
        'order': 'order_index.asc',
        'limit': 5,
    }
    assert call['headers']['apikey'] == 'anon-key'
    assert call['headers']['Authorization'] == 'Bearer anon-key'
    assert call['timeout'] == 5


def test_insert_strips_empty_id_and_notifies(rest, recorder):
    calls, responses = recorder
    responses.append(FakeResponse(payload=[{'id': 'abc', 'name': 'Ama'}]))
    seen = []
    rest.subscribe('contact_inquiries', seen.append)

    rest.insert('contact_inquiries', [{'id': '', 'name': 'Ama'}])

    assert calls[0]['method'] == 'POST'
    assert calls[0]['json'] == [{'name': 'Ama'}]
    assert calls[0]['headers']['Prefer'] == 'return=representation'
    assert seen == [{'id': 'abc', 'name': 'Ama'}]


def test_update_and_delete_filter_by_id(rest, recorder):
    calls, responses = recorder
    responses.append(FakeResponse(payload=[{'id': '7', 'status': 'read'}]))
    responses.append(FakeResponse(payload=[{'id': '7'}]))

    rest.update('contact_inquiries', {'id': '7', 'status': 'read'}, eq={'id': '7'})
    deleted = rest.delete('contact_inquiries', eq={'id': '7'})

    assert calls[0]['method'] == 'PATCH'
    assert calls[0]['params'] == {'id': 'eq.7'}
    assert calls[0]['json'] == {'status': 'read'}
    assert calls[1]['method'] == 'DELETE'
    assert deleted == 1


def test_upsert_merges_on_conflict_column(rest, recorder):
    calls, _ = recorder
    rest.upsert('site_content', {'key': 'mission_text', 'value': 'Learn'}, on_conflict='key')

    assert calls[0]['params'] == {'on_conflict': 'key'}
    assert calls[0]['headers']['Prefer'] == 'resolution=merge-duplicates,return=representation'


def test_count_reads_content_range(rest, recorder):
    calls, responses = recorder
    responses.append(FakeResponse(headers={'Content-Range': '0-9/42'}))

    assert rest.count('events') == 42
    assert calls[0]['method'] == 'HEAD'
    assert calls[0]['headers']['Prefer'] == 'count=exact'


def test_error_status_raises_backend_error(rest, recorder):
    _, responses = recorder
    responses.append(FakeResponse(status_code=401, text='invalid key'))

    with pytest.raises(BackendError):
        rest.select('events')


def test_transport_errors_raise_backend_error(rest, monkeypatch):
    def boom(*args, **kwargs):
        raise requests.exceptions.ConnectionError('no route to host')

    monkeypatch.setattr('fountaingate.services.rest_backend.requests.request', boom)
    with pytest.raises(BackendError):
        rest.count('events')


def test_non_json_reply_raises_backend_error(rest, recorder):
    _, responses = recorder
    responses.append(FakeResponse(body='<html><body>Bad gateway</body></html>'))

    with pytest.raises(BackendError):
        rest.select('core_values')


def test_manager_keeps_items_when_reply_is_not_json(rest, recorder):
    _, responses = recorder
    responses.append(FakeResponse(payload=[{'id': '1', 'title': 'Integrity', 'order_index': 0}]))
    responses.append(FakeResponse(body='<html>maintenance</html>'))
    manager = EntityManager(rest, 'core_values')

    assert len(manager.list()) == 1
    assert manager.list() == [{'id': '1', 'title': 'Integrity', 'order_index': 0}]


def test_select_orders_by_several_columns(rest, recorder):
    calls, _ = recorder
    rest.select('news_posts', order_by=('published_date', 'created_at'), descending=True)
    assert calls[0]['params']['order'] == 'published_date.desc,created_at.desc'
