"""Console logging for firesync.

Progress lines (``Downloading to ./data/x.json``) print as-is, the way a
task runner reports steps. Problems get a coloured ``>>`` marker so
``options.path undefined: ...`` stands out between them; ``--verbose``
adds dimmed detail lines (skipped files, ignored keys).

Usage::

    from firesync.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("Downloading to %s", output)
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["TaskFormatter", "get_logger", "setup_logging"]

LOGGER_NAME = "firesync"

# Library use stays silent until the CLI calls setup_logging().
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class TaskFormatter(logging.Formatter):
    """Plain progress lines, ``>>`` markers for warnings and errors."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"{Fore.RED}>>{Style.RESET_ALL} {msg}"
        if record.levelno >= logging.WARNING:
            return f"{Fore.YELLOW}>>{Style.RESET_ALL} {msg}"
        if record.levelno < logging.INFO:
            return f"{Style.DIM}{msg}{Style.RESET_ALL}"
        return msg


def _console_handler(logger):
    for handler in logger.handlers:
        if isinstance(handler.formatter, TaskFormatter):
            # Follow the current stderr (it may have been swapped since).
            handler.setStream(sys.stderr)
            return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TaskFormatter("%(message)s"))
    logger.addHandler(handler)
    return handler


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send firesync's log output to stderr.

    Safe to call more than once; the console handler is reused.

    Args:
        verbose: Show ``DEBUG`` detail lines.
        quiet: Only show warnings and errors (wins over *verbose*).
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _console_handler(logger).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``firesync`` namespace."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
