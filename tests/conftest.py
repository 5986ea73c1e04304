"""
Shared test fixtures and configuration for pytest.

Provides an in-memory stand-in for the Firebase Realtime Database so the
sync operations can run without network access.
"""

import copy
import json
import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from firesync.context import SyncContext


# ============================================================================
# In-memory database
# ============================================================================

class FakeEvent:
    """Mimics ``firebase_admin.db.Event``."""

    def __init__(self, event_type, path, data):
        self.event_type = event_type
        self.path = path
        self.data = data


class FakeRegistration:
    """Mimics ``firebase_admin.db.ListenerRegistration``."""

    def __init__(self, database, listener):
        self.database = database
        self.listener = listener
        self.closed = False

    def close(self):
        self.closed = True
        if self.listener in self.database.listeners:
            self.database.listeners.remove(self.listener)


class FakeDatabase:
    """Tree of dicts with write notifications."""

    def __init__(self, initial=None):
        self.root = copy.deepcopy(initial) if initial is not None else {}
        self.listeners = []
        self.writes = []

    @staticmethod
    def split(path):
        return [segment for segment in str(path).split('/') if segment]

    def get(self, segments):
        node = self.root
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    def set(self, segments, value):
        self.writes.append(('/' + '/'.join(segments), copy.deepcopy(value)))
        if not segments:
            self.root = copy.deepcopy(value) if value is not None else {}
        else:
            node = self.root
            for segment in segments[:-1]:
                if not isinstance(node.get(segment), dict):
                    node[segment] = {}
                node = node[segment]
            if value is None:
                node.pop(segments[-1], None)
            else:
                node[segments[-1]] = copy.deepcopy(value)
        self.notify(segments, value)

    def notify(self, segments, value):
        for listen_segments, callback in list(self.listeners):
            if segments[:len(listen_segments)] == listen_segments:
                relative = '/' + '/'.join(segments[len(listen_segments):])
                callback(FakeEvent('put', relative, copy.deepcopy(value)))

    def ref(self, path='/'):
        return FakeReference(self, self.split(path))


class FakeReference:
    """Mimics the subset of ``firebase_admin.db.Reference`` firesync uses."""

    def __init__(self, database, segments):
        self.database = database
        self.segments = list(segments)

    @property
    def key(self):
        return self.segments[-1] if self.segments else None

    def child(self, path):
        return FakeReference(self.database, self.segments + FakeDatabase.split(path))

    def get(self):
        return self.database.get(self.segments)

    def set(self, value):
        self.database.set(self.segments, value)

    def update(self, value):
        if not value or not isinstance(value, dict):
            raise ValueError('Value argument must be a non-empty dictionary.')
        for name, item in value.items():
            self.database.set(self.segments + FakeDatabase.split(name), item)

    def listen(self, callback):
        listener = (self.segments, callback)
        self.database.listeners.append(listener)
        callback(FakeEvent('put', '/', self.get()))
        return FakeRegistration(self.database, listener)


class FakeConnection:
    """Stands in for :class:`FirebaseConnection`."""

    def __init__(self, reference, credential, database=None):
        self.reference = reference
        self.credential = credential
        self.database = database if database is not None else FakeDatabase()
        self.connect_calls = 0

    def connect(self):
        self.connect_calls += 1
        return self

    def ref(self, path):
        return self.database.ref(path)


# ============================================================================
# Fixtures
# ============================================================================

REFERENCE = "https://example.firebaseio.com/grunt-firebase"


@pytest.fixture
def fake_db():
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def fake_connection(fake_db):
    """Connection to the in-memory database."""
    return FakeConnection(REFERENCE, {"type": "service_account"}, fake_db)


@pytest.fixture
def fake_context(fake_db):
    """SyncContext whose connections all point at the in-memory database."""
    return SyncContext(
        connection_factory=lambda reference, credential: FakeConnection(reference, credential, fake_db)
    )


@pytest.fixture
def write_json_file(tmp_path):
    """Factory writing a JSON document under ``tmp_path``."""

    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write
