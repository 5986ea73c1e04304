"""
Task options model and per-mode settings
"""
from collections import namedtuple
from enum import Enum
from typing import Any, Dict, List, Optional


class Mode(str, Enum):
    """Synchronization modes.

    Inherits from ``str`` so that ``Mode.UPLOAD == "upload"`` is ``True``.
    """
    UPLOAD = "upload"
    DOWNLOAD = "download"
    LIVE = "live"

    @classmethod
    def parse(cls, value) -> 'Mode':
        """Parse a mode name case-insensitively.

        Unset or unrecognized values fall back to :attr:`UPLOAD`.

        Example:
            >>> Mode.parse('Download')
            <Mode.DOWNLOAD: 'download'>
            >>> Mode.parse('sideways')
            <Mode.UPLOAD: 'upload'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UPLOAD


UploadSettings = namedtuple('UploadSettings', ['data', 'files'])
DownloadSettings = namedtuple('DownloadSettings', ['dest', 'timeout'])
LiveSettings = namedtuple('LiveSettings', ['files', 'poll_interval'])


DEFAULT_DEST = './'
DEFAULT_POLL_INTERVAL = 0.5


class SyncOptions:
    """
    Resolved options for one task target.
    """

    def __init__(self, reference="", path="", credential=None, mode=Mode.UPLOAD,
                 data=None, dest=DEFAULT_DEST, files=None,
                 poll_interval=DEFAULT_POLL_INTERVAL, timeout=None):
        """
        Initialize SyncOptions.

        Args:
            reference: Database root URL
            path: Path in the database to sync with
            credential: Service-account file path or parsed service-account dict
            mode: :class:`Mode` or mode name
            data: Optional mapping merged into ``path`` on upload
            dest: Directory the download is written to
            files: Local JSON file paths for upload and live modes
            poll_interval: Seconds between file-change checks in live mode
            timeout: Seconds to wait for the download value (``None`` waits forever)
        """
        self.reference = reference
        self.path = path
        self.credential = credential
        self.mode = Mode.parse(mode)
        self.data = data
        self.dest = dest or DEFAULT_DEST
        self.files: List[str] = list(files) if files else []
        self.poll_interval = poll_interval
        self.timeout = timeout

    def settings(self):
        """Return the settings relevant to :attr:`mode`."""
        if self.mode is Mode.DOWNLOAD:
            return DownloadSettings(dest=self.dest, timeout=self.timeout)
        if self.mode is Mode.LIVE:
            return LiveSettings(files=self.files, poll_interval=self.poll_interval)
        return UploadSettings(data=self.data, files=self.files)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary (the shape :func:`validate_options` checks)."""
        return {
            "reference": self.reference,
            "path": self.path,
            "credential": self.credential,
            "mode": self.mode.value,
            "data": self.data,
            "dest": self.dest,
            "files": list(self.files),
            "poll_interval": self.poll_interval,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], files: Optional[List[str]] = None) -> 'SyncOptions':
        """Deserialize from a merged options dictionary."""
        return cls(
            reference=data.get("reference", ""),
            path=data.get("path", ""),
            credential=data.get("credential"),
            mode=data.get("mode"),
            data=data.get("data"),
            dest=data.get("dest", DEFAULT_DEST),
            files=files if files is not None else data.get("files"),
            poll_interval=data.get("poll_interval", DEFAULT_POLL_INTERVAL),
            timeout=data.get("timeout"),
        )
