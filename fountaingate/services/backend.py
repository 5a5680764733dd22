"""
Content Backend

Collection-scoped access to the relational store. Every page and admin
manager goes through this interface:

    select(collection, order_by=None, descending=False, limit=None, eq=None, in_=None)
    insert(collection, rows)
    update(collection, values, eq)
    delete(collection, eq)
    upsert(collection, row, on_conflict)
    count(collection)
    subscribe(collection, callback) -> unsubscribe

Records are plain dicts. ``order_by`` is a column name or a sequence of
column names (later columns break ties), all sorted in the same direction.
``eq`` is a ``{column: value}`` mapping and ``in_`` a ``(column, values)``
pair. Failures raise ``BackendError``.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from fountaingate.extensions import db
from fountaingate.models import COLLECTION_MODELS

logger = logging.getLogger(__name__)


def order_columns(order_by):
    if not order_by:
        return []
    if isinstance(order_by, str):
        return [order_by]
    return list(order_by)


class BackendError(Exception):
    """A backend operation failed (query error, transport error, bad collection)."""


class ContentBackend:
    """Base class holding the in-process insert notifier."""

    def __init__(self):
        self._subscribers = {}

    def subscribe(self, collection, callback):
        """Call ``callback(row)`` after each successful insert into ``collection``."""
        self._subscribers.setdefault(collection, []).append(callback)

        def unsubscribe():
            callbacks = self._subscribers.get(collection, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def _notify_insert(self, collection, rows):
        for callback in list(self._subscribers.get(collection, [])):
            for row in rows:
                try:
                    callback(row)
                except Exception:
                    logger.exception('Insert subscriber for %s failed', collection)

    def select(self, collection, order_by=None, descending=False, limit=None, eq=None, in_=None):
        raise NotImplementedError

    def insert(self, collection, rows):
        raise NotImplementedError

    def update(self, collection, values, eq):
        raise NotImplementedError

    def delete(self, collection, eq):
        raise NotImplementedError

    def upsert(self, collection, row, on_conflict):
        raise NotImplementedError

    def count(self, collection):
        raise NotImplementedError


class SQLAlchemyBackend(ContentBackend):
    """Backend over the Flask-SQLAlchemy models in ``fountaingate.models``."""

    def __init__(self, models=None):
        super().__init__()
        self.models = models if models is not None else COLLECTION_MODELS

    def _model(self, collection):
        model = self.models.get(collection)
        if model is None:
            raise BackendError(f'Unknown collection "{collection}"')
        return model

    def _columns(self, model):
        return set(model.__table__.columns.keys())

    def _check_columns(self, model, names):
        unknown = set(names) - self._columns(model)
        if unknown:
            raise BackendError(
                f'Unknown column(s) for {model.__tablename__}: {", ".join(sorted(unknown))}'
            )

    def _filtered(self, model, eq=None, in_=None):
        query = model.query
        if eq:
            self._check_columns(model, eq.keys())
            query = query.filter_by(**eq)
        if in_:
            column, values = in_
            self._check_columns(model, [column])
            query = query.filter(getattr(model, column).in_(list(values)))
        return query

    def select(self, collection, order_by=None, descending=False, limit=None, eq=None, in_=None):
        model = self._model(collection)
        try:
            query = self._filtered(model, eq, in_)
            columns = order_columns(order_by)
            self._check_columns(model, columns)
            for name in columns:
                column = getattr(model, name)
                query = query.order_by(column.desc() if descending else column.asc())
            if limit:
                query = query.limit(limit)
            return [row.to_dict() for row in query.all()]
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(f'select from {collection} failed: {e}') from e

    def insert(self, collection, rows):
        model = self._model(collection)
        created = []
        try:
            for values in rows:
                values = {k: v for k, v in values.items() if not (k == 'id' and not v)}
                self._check_columns(model, values.keys())
                obj = model(**values)
                db.session.add(obj)
                created.append(obj)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(f'insert into {collection} failed: {e}') from e
        except BackendError:
            db.session.rollback()
            raise

        inserted = [obj.to_dict() for obj in created]
        self._notify_insert(collection, inserted)
        return inserted

    def update(self, collection, values, eq):
        model = self._model(collection)
        values = {k: v for k, v in values.items() if k != 'id'}
        self._check_columns(model, values.keys())
        try:
            rows = self._filtered(model, eq).all()
            for row in rows:
                for name, value in values.items():
                    setattr(row, name, value)
            db.session.commit()
            return [row.to_dict() for row in rows]
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(f'update of {collection} failed: {e}') from e

    def delete(self, collection, eq):
        model = self._model(collection)
        try:
            deleted = self._filtered(model, eq).delete(synchronize_session=False)
            db.session.commit()
            return deleted
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(f'delete from {collection} failed: {e}') from e

    def upsert(self, collection, row, on_conflict):
        model = self._model(collection)
        self._check_columns(model, row.keys())
        if on_conflict not in row:
            raise BackendError(f'upsert into {collection} needs a value for "{on_conflict}"')
        try:
            existing = model.query.filter_by(**{on_conflict: row[on_conflict]}).first()
            if existing:
                for name, value in row.items():
                    if name != 'id':
                        setattr(existing, name, value)
                obj = existing
            else:
                obj = model(**row)
                db.session.add(obj)
            db.session.commit()
            return obj.to_dict()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(f'upsert into {collection} failed: {e}') from e

    def count(self, collection):
        model = self._model(collection)
        try:
            return model.query.count()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(f'count of {collection} failed: {e}') from e
