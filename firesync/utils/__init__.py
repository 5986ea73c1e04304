"""Utility modules for firesync."""

from .config_loader import TaskConfig
from .file_utils import ensure_dir, file_key, read_json, write_json, expand_file_patterns
from .logger import get_logger, setup_logging
from .validation import OptionViolation, validate_options, format_violation

__all__ = [
    'TaskConfig',
    'ensure_dir',
    'file_key',
    'read_json',
    'write_json',
    'expand_file_patterns',
    'get_logger',
    'setup_logging',
    'OptionViolation',
    'validate_options',
    'format_violation',
]
