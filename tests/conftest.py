import pytest

from fountaingate import create_app
from fountaingate.config import TestConfig
from fountaingate.extensions import db
from fountaingate.services import BackendError, ContentBackend


class FakeBackend(ContentBackend):
    """In-memory backend that records every call made against it."""

    def __init__(self, data=None, fail=()):
        super().__init__()
        self.data = {name: [dict(row) for row in rows] for name, rows in (data or {}).items()}
        self.fail = set(fail)
        self.calls = []
        self._next_id = 1

    def _record(self, op, collection, **details):
        self.calls.append((op, collection, details))
        if op in self.fail:
            raise BackendError(f'{op} on {collection} failed')

    def calls_for(self, op):
        return [call for call in self.calls if call[0] == op]

    def select(self, collection, order_by=None, descending=False, limit=None, eq=None, in_=None):
        self._record('select', collection)
        rows = [dict(row) for row in self.data.get(collection, [])]
        if eq:
            rows = [r for r in rows if all(r.get(k) == v for k, v in eq.items())]
        if in_:
            column, values = in_
            rows = [r for r in rows if r.get(column) in values]
        if order_by:
            columns = [order_by] if isinstance(order_by, str) else list(order_by)
            rows.sort(key=lambda r: tuple(r.get(c) for c in columns), reverse=descending)
        if limit:
            rows = rows[:limit]
        return rows

    def insert(self, collection, rows):
        self._record('insert', collection, rows=rows)
        inserted = []
        for row in rows:
            row = dict(row)
            if not row.get('id'):
                row['id'] = f'{collection}-{self._next_id}'
                self._next_id += 1
            self.data.setdefault(collection, []).append(row)
            inserted.append(dict(row))
        self._notify_insert(collection, inserted)
        return inserted

    def update(self, collection, values, eq):
        self._record('update', collection, values=values, eq=eq)
        updated = []
        for row in self.data.get(collection, []):
            if all(row.get(k) == v for k, v in eq.items()):
                row.update({k: v for k, v in values.items() if k != 'id'})
                updated.append(dict(row))
        return updated

    def delete(self, collection, eq):
        self._record('delete', collection, eq=eq)
        before = self.data.get(collection, [])
        kept = [r for r in before if not all(r.get(k) == v for k, v in eq.items())]
        self.data[collection] = kept
        return len(before) - len(kept)

    def upsert(self, collection, row, on_conflict):
        self._record('upsert', collection, row=row, on_conflict=on_conflict)
        for existing in self.data.setdefault(collection, []):
            if existing.get(on_conflict) == row[on_conflict]:
                existing.update(row)
                return dict(existing)
        self.data[collection].append(dict(row))
        return dict(row)

    def count(self, collection):
        self._record('count', collection)
        return len(self.data.get(collection, []))


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(client):
    r = client.post('/admin/login', data={'email': 'admin@fga.local', 'password': 'SecurePass123'})
    assert r.status_code == 302
    return client


@pytest.fixture()
def insert(app):
    """Insert rows through the application backend, outside any request."""
    def _insert(collection, *rows):
        with app.app_context():
            return app.extensions['content_backend'].insert(collection, list(rows))
    return _insert


@pytest.fixture()
def fetch(app):
    def _fetch(collection, **kwargs):
        with app.app_context():
            return app.extensions['content_backend'].select(collection, **kwargs)
    return _fetch


@pytest.fixture()
def fake_backend():
    return FakeBackend()
