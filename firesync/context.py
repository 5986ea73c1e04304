"""
firesync run context. Replaces a process-wide database singleton.

Created once by the CLI entry point and passed to every mode handler, so
all targets in a run share their database connections and tests can swap
in a fake connection factory.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from .services.firebase.connection import FirebaseConnection


@dataclass
class SyncContext:
    """Shared state for one firesync run."""

    connection_factory: Callable[[str, Any], Any] = FirebaseConnection
    connections: Dict[str, Any] = field(default_factory=dict)

    def connect(self, reference, credential):
        """Return the connection for *reference*, creating it on first use.

        A connection that already exists for the root URL is returned
        unchanged; *credential* is only used the first time.
        """
        connection = self.connections.get(reference)
        if connection is None:
            connection = self.connection_factory(reference, credential)
            self.connections[reference] = connection
        connection.connect()
        return connection
