"""
Firebase Realtime Database connection.

Wraps one ``firebase_admin`` App per database root URL. The App is created
lazily on first use and kept for the rest of the process.
"""
import firebase_admin
from firebase_admin import credentials
from firebase_admin import db

from ...utils.logger import get_logger

log = get_logger(__name__)


class FirebaseConnection:
    """Lazily initialised handle to one Realtime Database instance.

    Args:
        reference: Database root URL (e.g. ``https://my-db.firebaseio.com``)
        credential: Path to a service-account JSON file, or its parsed content
    """

    def __init__(self, reference, credential):
        self.reference = reference
        self.credential = credential
        self.app = None

    def is_connected(self):
        """Return True once :meth:`connect` has created (or found) the App."""
        return self.app is not None

    def connect(self):
        """Create the App if needed and return it.

        Repeated calls return the same App. If an App for this root URL was
        already registered with ``firebase_admin`` it is reused. Errors from
        ``firebase_admin`` (bad credential, bad URL) propagate unchanged.
        """
        if self.app is not None:
            return self.app

        try:
            self.app = firebase_admin.get_app(self.reference)
            log.debug("Reusing Firebase app for %s", self.reference)
        except ValueError:
            cred = credentials.Certificate(self.credential)
            self.app = firebase_admin.initialize_app(
                cred,
                {'databaseURL': self.reference},
                name=self.reference,
            )
            log.debug("Initialized Firebase app for %s", self.reference)

        return self.app

    def ref(self, path):
        """Return a ``db.Reference`` for *path*, connecting first if needed."""
        return db.reference(path, app=self.connect())
