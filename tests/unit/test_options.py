"""
Unit tests for the options model and mode parsing.
"""

import pytest

from firesync.models import (
    DownloadSettings,
    LiveSettings,
    Mode,
    SyncOptions,
    UploadSettings,
)


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    ("upload", Mode.UPLOAD),
    ("DOWNLOAD", Mode.DOWNLOAD),
    (" Live ", Mode.LIVE),
    (Mode.LIVE, Mode.LIVE),
    (None, Mode.UPLOAD),
    ("", Mode.UPLOAD),
    ("sideways", Mode.UPLOAD),
    (3, Mode.UPLOAD),
])
def test_mode_parse(value, expected):
    assert Mode.parse(value) is expected


@pytest.mark.unit
def test_mode_compares_to_string():
    assert Mode.DOWNLOAD == "download"


class TestSyncOptions:

    def test_defaults(self):
        options = SyncOptions.from_dict({})

        assert options.mode is Mode.UPLOAD
        assert options.dest == "./"
        assert options.files == []
        assert options.timeout is None

    def test_settings_follow_mode(self):
        base = {"data": {"a": 1}, "dest": "out/", "timeout": 5, "poll_interval": 0.1}

        upload = SyncOptions.from_dict(dict(base, mode="upload"), files=["a.json"]).settings()
        download = SyncOptions.from_dict(dict(base, mode="download")).settings()
        live = SyncOptions.from_dict(dict(base, mode="live"), files=["a.json"]).settings()

        assert upload == UploadSettings(data={"a": 1}, files=["a.json"])
        assert download == DownloadSettings(dest="out/", timeout=5)
        assert live == LiveSettings(files=["a.json"], poll_interval=0.1)

    def test_empty_dest_falls_back_to_current_directory(self):
        assert SyncOptions(dest="").dest == "./"

    def test_to_dict_round_trip(self):
        options = SyncOptions(reference="https://x.firebaseio.com", path="/p",
                              credential="key.json", mode="live", files=["a.json"])

        restored = SyncOptions.from_dict(options.to_dict())

        assert restored.to_dict() == options.to_dict()
        assert restored.to_dict()["mode"] == "live"
