"""
Data models for firesync
"""

from .options import (
    Mode,
    SyncOptions,
    UploadSettings,
    DownloadSettings,
    LiveSettings,
)

__all__ = ['Mode', 'SyncOptions', 'UploadSettings', 'DownloadSettings', 'LiveSettings']
