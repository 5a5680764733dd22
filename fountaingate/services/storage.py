"""
Key/Value Storage

Small string-valued stores standing in for browser local storage. Values are
always strings (usually JSON); callers own serialisation.
"""

import json
import logging
import os

from flask import session

logger = logging.getLogger(__name__)


class Storage:
    """Interface: ``get(key) -> str | None``, ``set(key, value)``, ``remove(key)``."""

    def get(self, key):
        raise NotImplementedError

    def set(self, key, value):
        raise NotImplementedError

    def remove(self, key):
        raise NotImplementedError


class MemoryStorage(Storage):
    """Process-local store, used by tests and one-off scripts."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, key):
        self.data.pop(key, None)


class FlaskSessionStorage(Storage):
    """Store backed by the signed cookie session, so it lives in the browser."""

    def get(self, key):
        return session.get(key)

    def set(self, key, value):
        session[key] = value

    def remove(self, key):
        session.pop(key, None)


class JsonFileStorage(Storage):
    """Store persisted as one JSON object in a file (instance folder by default)."""

    def __init__(self, path):
        self.path = path

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        with open(self.path, 'r', encoding='utf-8') as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f'{self.path} does not contain a JSON object')
        return data

    def _write(self, data):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + '.tmp'
        with open(tmp_path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh)
        os.replace(tmp_path, self.path)

    def _read_for_update(self):
        try:
            return self._read()
        except ValueError as e:
            logger.warning('Discarding unreadable storage file %s: %s', self.path, e)
            return {}

    def get(self, key):
        return self._read().get(key)

    def set(self, key, value):
        data = self._read_for_update()
        data[key] = value
        self._write(data)

    def remove(self, key):
        data = self._read_for_update()
        if key in data:
            del data[key]
            self._write(data)
