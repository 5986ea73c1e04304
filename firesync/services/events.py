"""
Events exchanged between live-sync producers and the consumer loop.
"""
from collections import namedtuple


# A watched local file was modified.
LocalChange = namedtuple('LocalChange', ['path'])

# A child of the synced database path changed.
RemoteChange = namedtuple('RemoteChange', ['key'])


def changed_keys(event):
    """Return the child keys touched by a ``db.Event``.

    ``put`` events at the root replace the whole node, so every key in the
    payload changed. ``patch`` events at the root list the changed keys in
    their payload (possibly as ``child/sub`` paths). Events below the root
    name the child in the first path segment.

    Example:
        >>> from types import SimpleNamespace
        >>> changed_keys(SimpleNamespace(event_type='put', path='/a/x', data=2))
        ['a']
    """
    segments = [segment for segment in (event.path or '/').split('/') if segment]
    if segments:
        return [segments[0]]

    if not isinstance(event.data, dict):
        return []

    keys = []
    for name in event.data:
        key = str(name).strip('/').split('/')[0]
        if key and key not in keys:
            keys.append(key)
    return keys
