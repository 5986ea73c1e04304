"""
Exception types raised by firesync.

Errors from ``firebase_admin`` and JSON parsing are not wrapped; they
propagate as-is.
"""


class FiresyncError(Exception):
    """Base class for firesync errors."""


class ConfigError(FiresyncError):
    """Task file is unreadable or refers to unknown targets."""


class WatchSetupError(FiresyncError):
    """The local file watcher could not be started."""


class DownloadTimeoutError(FiresyncError):
    """No value arrived from the database before the download timeout."""
