"""
Firebase Realtime Database synchronization package.

- :mod:`connection`: lazily initialised ``firebase_admin`` App per root URL
- :mod:`sync_engine`: upload and download at one database path
- :mod:`live`: bidirectional live sync driven by an event queue
"""
from .connection import FirebaseConnection
from .sync_engine import FirebaseSyncService, UploadReport, merge_update, output_filename
from .live import LiveSync, build_file_mapping

__all__ = [
    'FirebaseConnection',
    'FirebaseSyncService',
    'UploadReport',
    'merge_update',
    'output_filename',
    'LiveSync',
    'build_file_mapping',
]
