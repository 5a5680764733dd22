"""
Shared helpers for content models
"""

import uuid
from datetime import date, datetime


def new_id():
    return str(uuid.uuid4())


class RecordMixin:
    """Serialise a row to the flat record shape the content services use."""

    def to_dict(self):
        record = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            record[column.name] = value
        return record
