"""
Polling file watcher.

Tracks the modification time and size of a fixed set of files from a
daemon thread and reports each file whose stamp changed.
"""
import os
import threading
from typing import Callable, Dict, List, Optional, Tuple

from ..exceptions import WatchSetupError
from ..utils.logger import get_logger

log = get_logger(__name__)


def _stamp(path) -> Optional[Tuple[int, int]]:
    try:
        stat = os.stat(path)
    except FileNotFoundError:
        return None
    return stat.st_mtime_ns, stat.st_size


class FileWatcher:
    """Watch a set of files for modification.

    Only modifications are reported: a file that is missing at start and
    later appears, or one that disappears, produces no event.

    Args:
        paths: Files to watch
        on_change: Called with the path of each modified file
        interval: Seconds between polls
    """

    def __init__(self, paths, on_change: Callable[[str], None], interval: float = 0.5):
        self.paths: List[str] = list(paths)
        self.on_change = on_change
        self.interval = interval
        self._stamps: Dict[str, Optional[Tuple[int, int]]] = {}
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def snapshot(self):
        """Record the current stamp of every watched file.

        Raises:
            WatchSetupError: If a watched path is a directory or can't be stat'ed
        """
        stamps = {}
        for path in self.paths:
            if os.path.isdir(path):
                raise WatchSetupError(f"Cannot watch directory: {path}")
            try:
                stamps[path] = _stamp(path)
            except OSError as e:
                raise WatchSetupError(f"Cannot watch {path}: {e}") from e
        self._stamps = stamps

    def poll(self) -> List[str]:
        """Check every file once and report the modified ones.

        Returns:
            Paths whose stamp changed since the previous poll
        """
        changed = []
        for path in self.paths:
            previous = self._stamps.get(path)
            try:
                current = _stamp(path)
            except OSError as e:
                log.debug("Could not stat %s: %s", path, e)
                continue

            self._stamps[path] = current
            if previous is not None and current is not None and current != previous:
                changed.append(path)

        for path in changed:
            self.on_change(path)
        return changed

    def start(self):
        """Snapshot the files and start the polling thread."""
        self.snapshot()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="firesync-watcher", daemon=True)
        self._thread.start()

    def stop(self):
        """Stop the polling thread."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval + 1)
            self._thread = None

    def _run(self):
        while not self._stop.wait(self.interval):
            self.poll()
