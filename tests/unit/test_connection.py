"""
Unit tests for the Firebase connection and the run context.
"""

from unittest.mock import MagicMock, patch

import pytest

from firesync.context import SyncContext
from firesync.services.firebase import connection as connection_module
from firesync.services.firebase.connection import FirebaseConnection


URL = "https://example.firebaseio.com"
CREDENTIAL = {"type": "service_account", "project_id": "demo"}


@pytest.fixture
def admin():
    """Patch firebase_admin as seen by the connection module."""
    with patch.object(connection_module, "firebase_admin") as firebase_admin, \
            patch.object(connection_module, "credentials") as credentials, \
            patch.object(connection_module, "db") as db:
        firebase_admin.get_app.side_effect = ValueError("no app")
        firebase_admin.initialize_app.return_value = MagicMock(name="app")
        yield firebase_admin, credentials, db


class TestFirebaseConnection:

    def test_connect_initializes_once(self, admin):
        firebase_admin, credentials, _ = admin
        conn = FirebaseConnection(URL, CREDENTIAL)

        first = conn.connect()
        second = conn.connect()

        assert first is second
        assert conn.is_connected()
        credentials.Certificate.assert_called_once_with(CREDENTIAL)
        firebase_admin.initialize_app.assert_called_once_with(
            credentials.Certificate.return_value,
            {"databaseURL": URL},
            name=URL,
        )

    def test_existing_app_is_reused(self, admin):
        firebase_admin, credentials, _ = admin
        existing = MagicMock(name="existing")
        firebase_admin.get_app.side_effect = None
        firebase_admin.get_app.return_value = existing

        assert FirebaseConnection(URL, CREDENTIAL).connect() is existing
        firebase_admin.initialize_app.assert_not_called()
        credentials.Certificate.assert_not_called()

    def test_ref_binds_to_app(self, admin):
        firebase_admin, _, db = admin
        conn = FirebaseConnection(URL, CREDENTIAL)

        conn.ref("/test")

        db.reference.assert_called_once_with("/test", app=firebase_admin.initialize_app.return_value)

    def test_credential_errors_propagate(self, admin):
        _, credentials, _ = admin
        credentials.Certificate.side_effect = ValueError("Invalid service account certificate")
        conn = FirebaseConnection(URL, {"type": "nope"})

        with pytest.raises(ValueError, match="Invalid service account"):
            conn.connect()
        assert not conn.is_connected()


class TestSyncContext:

    def test_same_reference_returns_same_connection(self):
        created = []

        def factory(reference, credential):
            conn = MagicMock(reference=reference)
            created.append(conn)
            return conn

        context = SyncContext(connection_factory=factory)

        first = context.connect(URL, CREDENTIAL)
        second = context.connect(URL, {"other": "credential"})

        assert first is second
        assert len(created) == 1
        assert first.connect.call_count == 2

    def test_distinct_references_get_distinct_connections(self):
        context = SyncContext(connection_factory=lambda reference, credential: MagicMock())

        assert context.connect(URL, CREDENTIAL) is not context.connect(URL + "/other", CREDENTIAL)
        assert len(context.connections) == 2
