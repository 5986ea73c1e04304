"""
Upload and download between local JSON files and the Realtime Database.

Provides :class:`FirebaseSyncService`, bound to one connection and one
database path.
"""
import os
import queue
from typing import Any, List, Optional

from ...exceptions import DownloadTimeoutError
from ...utils.file_utils import file_key, read_json, write_json
from ...utils.logger import get_logger

log = get_logger(__name__)


def merge_update(ref, value):
    """Merge *value* into the node at *ref*.

    Objects are merged key by key (siblings are kept, matching keys are
    replaced wholesale). Arrays are merged by index, which is how the
    Realtime Database stores them. Scalars and ``null`` replace the node.
    Empty objects and arrays are a no-op.

    Args:
        ref: ``db.Reference`` (or compatible) to write to
        value: Parsed JSON value
    """
    if isinstance(value, list):
        value = {str(index): item for index, item in enumerate(value)}

    if isinstance(value, dict):
        if value:
            ref.update(value)
        return

    ref.set(value)


def output_filename(reference, dest='./'):
    """Compute the download target path for a database root URL.

    The last path segment of the root URL becomes the file stem.

    Example:
        >>> output_filename('https://example.com/grunt-firebase')
        './grunt-firebase.json'
    """
    name = reference.rstrip('/').split('/')[-1]
    return os.path.join(dest, name) + '.json'


class UploadReport:
    """Outcome of an upload: which keys were written and which files were skipped."""

    def __init__(self):
        self.data_written = False
        self.uploaded: List[str] = []
        self.skipped: List[str] = []

    def __repr__(self):
        return (f"UploadReport(data_written={self.data_written}, "
                f"uploaded={self.uploaded}, skipped={self.skipped})")


class FirebaseSyncService:
    """Pushes and pulls JSON data at one database path.

    Args:
        connection: :class:`FirebaseConnection` (or anything with ``ref()``
            and a ``reference`` root URL)
        path: Path in the database, e.g. ``/test``
    """

    def __init__(self, connection, path):
        self.connection = connection
        self.path = path

    def ref(self):
        """Return the reference for the configured path."""
        return self.connection.ref(self.path)

    # ── Upload ─────────────────────────────────────────────────────────

    def upload(self, data=None, files=()):
        """Merge *data* and the contents of *files* into the database.

        *data* is merged into the configured path. Each existing file is
        parsed and merged into ``<path>/<file stem>``, in list order. Files
        that don't exist are skipped. Parse errors propagate.

        Args:
            data: Optional mapping to merge at the path
            files: Local JSON file paths

        Returns:
            :class:`UploadReport`

        Raises:
            TypeError: If *data* is not a mapping (nothing is written)
        """
        if data is not None and not isinstance(data, dict):
            raise TypeError(f"data must be a JSON object, got {type(data).__name__}")

        ref = self.ref()
        report = UploadReport()

        if data:
            ref.update(data)
            report.data_written = True

        for filepath in files:
            if not os.path.isfile(filepath):
                log.debug("Skipping missing file %s", filepath)
                report.skipped.append(filepath)
                continue

            key = file_key(filepath)
            content = read_json(filepath)
            merge_update(ref.child(key), content)
            log.debug("Uploaded %s to %s/%s", filepath, self.path, key)
            report.uploaded.append(key)

        return report

    # ── Download ───────────────────────────────────────────────────────

    def download(self, dest='./', timeout: Optional[float] = None) -> str:
        """Write the current value at the path to a local JSON file.

        Subscribes to the node, waits for the first value event, closes the
        subscription and writes the value as pretty-printed JSON to
        ``<dest>/<last segment of root URL>.json``.

        Args:
            dest: Destination directory
            timeout: Seconds to wait for the value; ``None`` waits forever

        Returns:
            Path of the written file

        Raises:
            DownloadTimeoutError: If no value arrived within *timeout*
        """
        output = output_filename(self.connection.reference, dest)
        log.info("Downloading to %s", output)

        value = self._first_value(self.ref(), timeout)
        write_json(output, value)
        return output

    @staticmethod
    def _first_value(ref, timeout) -> Any:
        events = queue.Queue()
        registration = ref.listen(events.put)
        try:
            event = events.get(timeout=timeout)
        except queue.Empty:
            raise DownloadTimeoutError(
                f"No value received from the database within {timeout}s"
            ) from None
        finally:
            registration.close()
        return event.data
