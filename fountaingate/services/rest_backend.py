"""
Hosted REST Backend

Talks to a PostgREST-compatible endpoint (e.g. a Supabase project) at
``{base_url}/rest/v1/{collection}``.
"""

import logging
import re
import requests

from fountaingate.services.backend import BackendError, ContentBackend, order_columns

logger = logging.getLogger(__name__)

_CONTENT_RANGE_TOTAL = re.compile(r'/(\d+)$')


def _quote(value):
    value = str(value).replace('"', '\\"')
    return f'"{value}"'


class RestBackend(ContentBackend):
    """Backend speaking the PostgREST query-string dialect over ``requests``."""

    def __init__(self, base_url, api_key, timeout=10):
        super().__init__()
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    def _url(self, collection):
        return f'{self.base_url}/rest/v1/{collection}'

    def _headers(self, prefer=None):
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }
        if prefer:
            headers['Prefer'] = prefer
        return headers

    @staticmethod
    def _filter_params(eq=None, in_=None):
        params = {}
        for column, value in (eq or {}).items():
            params[column] = f'eq.{value}'
        if in_:
            column, values = in_
            params[column] = 'in.(' + ','.join(_quote(v) for v in values) + ')'
        return params

    def _request(self, method, collection, params=None, json=None, prefer=None):
        try:
            resp = requests.request(
                method,
                self._url(collection),
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise BackendError(f'{method} {collection} timed out') from e
        except requests.exceptions.RequestException as e:
            raise BackendError(f'{method} {collection} failed: {e}') from e

        if resp.status_code >= 400:
            raise BackendError(f'{method} {collection} returned {resp.status_code}: {resp.text}')
        return resp

    @staticmethod
    def _rows(resp):
        if not resp.content:
            return []
        try:
            data = resp.json()
        except ValueError as e:
            raise BackendError(f'Response from {resp.url} is not JSON') from e
        return data if isinstance(data, list) else [data]

    def select(self, collection, order_by=None, descending=False, limit=None, eq=None, in_=None):
        params = {'select': '*'}
        params.update(self._filter_params(eq, in_))
        columns = order_columns(order_by)
        if columns:
            direction = 'desc' if descending else 'asc'
            params['order'] = ','.join(f'{name}.{direction}' for name in columns)
        if limit:
            params['limit'] = limit
        return self._rows(self._request('GET', collection, params=params))

    def insert(self, collection, rows):
        payload = [{k: v for k, v in row.items() if not (k == 'id' and not v)} for row in rows]
        resp = self._request('POST', collection, json=payload, prefer='return=representation')
        inserted = self._rows(resp)
        self._notify_insert(collection, inserted)
        return inserted

    def update(self, collection, values, eq):
        values = {k: v for k, v in values.items() if k != 'id'}
        resp = self._request('PATCH', collection, params=self._filter_params(eq),
                             json=values, prefer='return=representation')
        return self._rows(resp)

    def delete(self, collection, eq):
        resp = self._request('DELETE', collection, params=self._filter_params(eq),
                             prefer='return=representation')
        return len(self._rows(resp))

    def upsert(self, collection, row, on_conflict):
        resp = self._request('POST', collection, params={'on_conflict': on_conflict}, json=[row],
                             prefer='resolution=merge-duplicates,return=representation')
        rows = self._rows(resp)
        return rows[0] if rows else row

    def count(self, collection):
        resp = self._request('HEAD', collection, params={'select': '*'}, prefer='count=exact')
        content_range = resp.headers.get('Content-Range', '')
        match = _CONTENT_RANGE_TOTAL.search(content_range)
        if not match:
            logger.warning('No row count in Content-Range for %s: %r', collection, content_range)
            return 0
        return int(match.group(1))
