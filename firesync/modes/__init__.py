"""Mode handlers for firesync.

This package contains mode-specific handlers that encapsulate
the workflow logic for each synchronization mode.

  - UploadHandler   → mode "upload" (default)
  - DownloadHandler → mode "download"
  - LiveHandler     → mode "live"
"""
from ..models.options import Mode
from .base_handler import ModeHandler
from .upload_handler import UploadHandler
from .download_handler import DownloadHandler
from .live_handler import LiveHandler

# One handler per Mode member.
HANDLERS = {
    Mode.UPLOAD: UploadHandler,
    Mode.DOWNLOAD: DownloadHandler,
    Mode.LIVE: LiveHandler,
}


def select_handler(mode):
    """Return the handler class for *mode* (a :class:`Mode` or mode name).

    Unrecognized names fall back to :class:`UploadHandler`.
    """
    return HANDLERS[Mode.parse(mode)]


__all__ = [
    'ModeHandler',
    'UploadHandler',
    'DownloadHandler',
    'LiveHandler',
    'HANDLERS',
    'select_handler',
]
