"""
Generic Entity Manager

One manager per content collection: fetch-all-ordered, upsert by id
presence, confirmed delete-by-id, and a local list refresh after every
mutation. Filtering is done client-side over the fetched list.
"""

import logging

from fountaingate.services.backend import BackendError

logger = logging.getLogger(__name__)

INQUIRY_STATUSES = ('new', 'read', 'responded')

# Columns the backend owns; never sent back on insert or update
READ_ONLY_FIELDS = ('id', 'created_at')


class OperationResult:
    """Outcome of a mutating operation, reported the same way for every action."""

    def __init__(self, ok, message='', record=None, cancelled=False):
        self.ok = ok
        self.message = message
        self.record = record
        self.cancelled = cancelled

    def __bool__(self):
        return self.ok

    def __repr__(self):
        return f'<OperationResult ok={self.ok} {self.message!r}>'

    @classmethod
    def success(cls, message='', record=None):
        return cls(True, message, record)

    @classmethod
    def failure(cls, message):
        return cls(False, message)

    @classmethod
    def cancel(cls):
        return cls(False, 'Cancelled.', cancelled=True)


class EntityManager:
    """List/save/delete over one backend collection.

    ``items`` always holds the last successfully fetched list. ``editing`` is
    the record open in the editor: ``None`` when closed, a record with an
    empty id when creating.
    """

    def __init__(self, backend, collection, order_by='order_index', descending=False,
                 blank=None, label=None):
        self.backend = backend
        self.collection = collection
        self.order_by = order_by
        self.descending = descending
        self.blank = dict(blank or {})
        self.label = label or collection.replace('_', ' ')
        self.items = []
        self.editing = None

    @property
    def appends_order_index(self):
        return self.order_by == 'order_index'

    def list(self):
        try:
            self.items = self.backend.select(
                self.collection, order_by=self.order_by, descending=self.descending
            ) or []
        except BackendError as e:
            logger.error('Error fetching %s: %s', self.collection, e)
        return self.items

    def get(self, record_id):
        for item in self.items:
            if item.get('id') == record_id:
                return item
        return None

    # Editor state

    def start_create(self):
        self.editing = dict(self.blank, id='')
        return self.editing

    def start_edit(self, record):
        self.editing = dict(record)
        return self.editing

    def close_editor(self):
        self.editing = None

    # Mutations

    def save(self, record):
        record_id = record.get('id')
        values = {k: v for k, v in record.items() if k not in READ_ONLY_FIELDS}
        try:
            if record_id:
                self.backend.update(self.collection, values, eq={'id': record_id})
            else:
                if self.appends_order_index:
                    # Append to the end; two concurrent creators can pick the same index
                    values['order_index'] = len(self.items)
                self.backend.insert(self.collection, [values])
        except BackendError as e:
            logger.error('Error saving %s: %s', self.label, e)
            self.editing = dict(record)
            return OperationResult.failure(f'Error saving {self.label}. Please try again.')

        self.list()
        self.close_editor()
        verb = 'updated' if record_id else 'added'
        return OperationResult.success(f'{self.label.capitalize()} {verb} successfully.', record)

    def delete(self, record_id, confirm):
        """Delete after ``confirm()`` answers yes; a no makes no backend call."""
        if not confirm():
            return OperationResult.cancel()

        try:
            self.backend.delete(self.collection, eq={'id': record_id})
        except BackendError as e:
            logger.error('Error deleting %s %s: %s', self.label, record_id, e)
            return OperationResult.failure(f'Error deleting {self.label}. Please try again.')

        self.list()
        if self.editing and self.editing.get('id') == record_id:
            self.close_editor()
        return OperationResult.success(f'{self.label.capitalize()} deleted.')

    def set_status(self, record_id, status):
        if status not in INQUIRY_STATUSES:
            return OperationResult.failure(f'Unknown status "{status}".')
        try:
            self.backend.update(self.collection, {'status': status}, eq={'id': record_id})
        except BackendError as e:
            logger.error('Error updating status of %s %s: %s', self.label, record_id, e)
            return OperationResult.failure('Error updating status. Please try again.')

        self.list()
        return OperationResult.success(f'Marked as {status}.')

    # Client-side filtering

    def filter(self, **criteria):
        active = {k: v for k, v in criteria.items() if v not in (None, '', 'all')}
        return [
            item for item in self.items
            if all(item.get(field) == value for field, value in active.items())
        ]

    def distinct(self, field):
        values = []
        for item in self.items:
            value = item.get(field)
            if value and value not in values:
                values.append(value)
        return values

    def counts_by(self, field, values):
        counts = {'all': len(self.items)}
        for value in values:
            counts[value] = sum(1 for item in self.items if item.get(field) == value)
        return counts
