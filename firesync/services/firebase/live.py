"""
Bidirectional live sync between local JSON files and one database path.

Two producers feed a single event queue:

- a :class:`FileWatcher` reporting modified local files, and
- a ``db.Reference.listen`` subscription reporting changed children.

:meth:`LiveSync.run` consumes the queue until :meth:`LiveSync.stop` is
called or the process exits. Writes in one direction can echo back from the
other direction; nothing here suppresses that.
"""
import os
import queue
import threading
from typing import Dict

from ..events import LocalChange, RemoteChange, changed_keys
from ..watcher import FileWatcher
from ...utils.file_utils import file_key, read_json, write_json
from ...utils.logger import get_logger
from .sync_engine import merge_update

log = get_logger(__name__)


def build_file_mapping(files) -> Dict[str, str]:
    """Map each file's database key (its stem) to its path.

    When two files share a stem the later one wins.
    """
    return {file_key(filepath): filepath for filepath in files}


class LiveSync:
    """Keeps local files and the children of a database path in sync.

    Args:
        ref: ``db.Reference`` of the synced path
        files: Local JSON files; each mirrors the child named after its stem
        poll_interval: Seconds between local file checks
        watcher: Optional pre-built watcher (its ``on_change`` is replaced)
    """

    def __init__(self, ref, files, poll_interval=0.5, watcher=None):
        self.ref = ref
        self.files = list(files)
        self.mapping = build_file_mapping(self.files)
        self.poll_interval = poll_interval
        self.events = queue.Queue()

        if watcher is None:
            watcher = FileWatcher(self.files, self._on_local_change, poll_interval)
        else:
            watcher.on_change = self._on_local_change
        self.watcher = watcher

        self._registration = None
        self._snapshot_seen = False
        self._stop = threading.Event()

    # ── Producers ──────────────────────────────────────────────────────

    def _on_local_change(self, filepath):
        self.events.put(LocalChange(filepath))

    def _on_remote_event(self, event):
        # The first event carries the current value, not a change.
        if not self._snapshot_seen:
            self._snapshot_seen = True
            return
        for key in changed_keys(event):
            self.events.put(RemoteChange(key))

    # ── Lifecycle ──────────────────────────────────────────────────────

    def start(self):
        """Start watching files and subscribe to remote changes.

        Raises:
            WatchSetupError: If the file watcher can't start
        """
        self.watcher.start()
        log.info("Listening for file changes...")
        self._registration = self.ref.listen(self._on_remote_event)

    def stop(self):
        """Ask :meth:`run` to return after the event it is handling."""
        self._stop.set()

    def close(self):
        """Stop both producers."""
        self.watcher.stop()
        if self._registration is not None:
            self._registration.close()
            self._registration = None

    def run(self):
        """Start the producers and handle events until stopped."""
        try:
            self.start()
            while not self._stop.is_set():
                try:
                    event = self.events.get(timeout=self.poll_interval)
                except queue.Empty:
                    continue
                self.handle(event)
        finally:
            self.close()

    # ── Consumer ───────────────────────────────────────────────────────

    def handle(self, event):
        """Apply one event."""
        if isinstance(event, LocalChange):
            self.push_file(event.path)
        elif isinstance(event, RemoteChange):
            self.pull_child(event.key)
        else:
            raise TypeError(f"Unsupported live-sync event: {event!r}")

    def push_file(self, filepath):
        """Merge a modified local file into its child node."""
        log.info("%s was changed. Uploading to firebase...", filepath)
        merge_update(self.ref.child(file_key(filepath)), read_json(filepath))

    def pull_child(self, key):
        """Rewrite the local file mirroring child *key* with its current value."""
        filepath = self.mapping.get(key)
        if filepath is None:
            log.debug("No local file mapped to %s, ignoring change", key)
            return

        log.info("%s was changed. Updating file with new data...", key)
        if not os.path.isfile(filepath):
            log.debug("%s no longer exists, skipping", filepath)
            return

        value = self.ref.child(key).get()
        if value is None:
            log.debug("%s was removed remotely, leaving %s untouched", key, filepath)
            return
        write_json(filepath, value)
