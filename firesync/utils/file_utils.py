"""
File system utilities
"""
import glob
import json
import os
import re

from .logger import get_logger

log = get_logger(__name__)

_GLOB_CHARS = re.compile(r"[*?[]")


def ensure_dir(directory):
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path (empty string means the current directory)
    """
    if directory:
        os.makedirs(directory, exist_ok=True)


def file_key(filepath):
    """
    Derive the database child key for a local file.

    The key is the file's base name with its extension stripped.

    Example:
        >>> file_key('./data/one.json')
        'one'
        >>> file_key('archive.tar.gz')
        'archive.tar'
    """
    return os.path.splitext(os.path.basename(filepath))[0]


def read_json(filepath):
    """
    Parse a JSON document from disk.

    A missing file or malformed JSON raises.

    Args:
        filepath: Path to JSON file

    Returns:
        Parsed JSON value
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json(filepath, data):
    """
    Write *data* as pretty-printed JSON (2-space indent), replacing the file.

    Parent directories are created as needed. Errors propagate.

    Args:
        filepath: Destination path
        data: JSON-serializable value
    """
    ensure_dir(os.path.dirname(filepath))
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False))


def expand_file_patterns(patterns, base_dir='.'):
    """
    Expand a list of file patterns into concrete paths.

    Glob patterns are expanded (sorted, ``**`` matches recursively) and only
    matching files are kept. Plain paths are kept as given even when they do
    not exist, so callers can decide how to treat missing files. Relative
    patterns are resolved against *base_dir*. Duplicates are dropped while
    preserving first-seen order.

    Args:
        patterns: Iterable of path strings or glob patterns
        base_dir: Directory relative patterns are resolved against

    Returns:
        List of file paths
    """
    paths = []
    seen = set()

    for pattern in patterns:
        full = pattern if os.path.isabs(pattern) else os.path.join(base_dir, pattern)
        full = os.path.normpath(full)

        if _GLOB_CHARS.search(full):
            matches = [m for m in sorted(glob.glob(full, recursive=True)) if os.path.isfile(m)]
            if not matches:
                log.debug("Pattern %s matched no files", pattern)
        else:
            matches = [full]

        for match in matches:
            if match not in seen:
                seen.add(match)
                paths.append(match)

    return paths
