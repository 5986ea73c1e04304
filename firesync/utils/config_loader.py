"""
Task file loader

A task file (``firesync.json`` by default) holds shared options, named
targets with their own options and file patterns, and aliases that run
several targets in order.
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import ConfigError
from ..models.options import SyncOptions
from .file_utils import expand_file_patterns


DEFAULT_CONFIG_FILENAME = "firesync.json"

# Defaults applied under shared and target options.
DEFAULT_OPTIONS: Dict[str, Any] = {
    "mode": "upload",
    "dest": "./",
}

# Options that may come from the environment when the task file leaves them unset.
ENV_FALLBACKS = {
    "reference": "FIREBASE_DATABASE_URL",
    "credential": "FIREBASE_CREDENTIALS_PATH",
}

# Seconds; optional, but must be > 0 when set.
POSITIVE_NUMBER_OPTIONS = ("poll_interval", "timeout")


def _is_positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class TaskConfig:
    """Parsed task file."""

    def __init__(self, options=None, targets=None, aliases=None, base_dir="."):
        """
        Initialize TaskConfig.

        Args:
            options: Options shared by every target
            targets: Mapping of target name to ``{"options": {...}, "files": [...]}``
            aliases: Mapping of alias name to a list of target/alias names
            base_dir: Directory relative paths are resolved against
        """
        self.options: Dict[str, Any] = dict(options or {})
        self.targets: Dict[str, Dict[str, Any]] = dict(targets or {})
        self.aliases: Dict[str, List[str]] = dict(aliases or {})
        self.base_dir = str(base_dir)

    @staticmethod
    def get_config_path(config_path: Optional[str] = None) -> Path:
        """Return the task file path, defaulting to ``./firesync.json``."""
        if config_path:
            return Path(config_path)
        return Path.cwd() / DEFAULT_CONFIG_FILENAME

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'TaskConfig':
        """
        Load and parse a task file.

        Args:
            config_path: Path to the task file (``./firesync.json`` if omitted)

        Returns:
            TaskConfig instance

        Raises:
            ConfigError: If the file is missing, not valid JSON, or malformed
        """
        path = cls.get_config_path(config_path)
        if not path.exists():
            raise ConfigError(f"Task file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Error loading {path}: {e}") from e

        return cls.from_dict(raw, base_dir=path.parent)

    @classmethod
    def from_dict(cls, raw, base_dir=".") -> 'TaskConfig':
        """Build a TaskConfig from an already parsed task file."""
        if not isinstance(raw, dict):
            raise ConfigError("Task file must contain a JSON object")

        for section in ("options", "targets", "aliases"):
            if section in raw and not isinstance(raw[section], dict):
                raise ConfigError(f"'{section}' must be a JSON object")

        aliases = raw.get("aliases", {})
        for name, steps in aliases.items():
            if not isinstance(steps, list):
                raise ConfigError(f"Alias '{name}' must be a list of target names")

        return cls(
            options=raw.get("options"),
            targets=raw.get("targets"),
            aliases=aliases,
            base_dir=base_dir,
        )

    # ── Target resolution ─────────────────────────────────────────────

    def resolve(self, names: List[str]) -> List[str]:
        """
        Expand aliases into the ordered list of target names to run.

        Raises:
            ConfigError: On unknown names or alias cycles
        """
        resolved: List[str] = []
        for name in names:
            self._expand(name, [], resolved)
        return resolved

    def _expand(self, name, stack, resolved):
        if name in self.targets:
            resolved.append(name)
            return

        if name not in self.aliases:
            raise ConfigError(f"Unknown target or alias: '{name}'")

        if name in stack:
            chain = " -> ".join(stack + [name])
            raise ConfigError(f"Alias cycle detected: {chain}")

        for step in self.aliases[name]:
            self._expand(step, stack + [name], resolved)

    # ── Option merging ────────────────────────────────────────────────

    def merged_options(self, target: str) -> Dict[str, Any]:
        """
        Merge defaults, shared options, and the target's options (in that order).

        Environment fallbacks fill ``reference`` and ``credential`` when
        neither level sets them.
        """
        if target not in self.targets:
            raise ConfigError(f"Unknown target: '{target}'")

        target_conf = self.targets[target] or {}
        target_options = target_conf.get("options", {})
        if not isinstance(target_options, dict):
            raise ConfigError(f"Target '{target}' options must be a JSON object")

        merged = dict(DEFAULT_OPTIONS)
        merged.update(self.options)
        merged.update(target_options)

        credential = merged.get("credential")
        if isinstance(credential, str) and credential:
            merged["credential"] = self._resolve_path(credential)

        # Environment values are relative to the working directory, not the task file.
        for option, env_var in ENV_FALLBACKS.items():
            if not merged.get(option) and os.environ.get(env_var):
                merged[option] = os.environ[env_var]

        return merged

    def file_patterns(self, target: str) -> List[str]:
        """
        Collect a target's file patterns.

        Entries may be plain strings or ``{"src": "..."}`` / ``{"src": [...]}``
        objects.
        """
        entries = (self.targets.get(target) or {}).get("files", [])
        if isinstance(entries, (str, dict)):
            entries = [entries]

        patterns: List[str] = []
        for entry in entries:
            if isinstance(entry, str):
                patterns.append(entry)
            elif isinstance(entry, dict):
                src = entry.get("src", [])
                patterns.extend([src] if isinstance(src, str) else src)
            else:
                raise ConfigError(f"Target '{target}' has an invalid files entry: {entry!r}")
        return patterns

    def options_for(self, target: str, mode: Optional[str] = None) -> SyncOptions:
        """
        Build the :class:`SyncOptions` for a target.

        Args:
            target: Target name
            mode: Optional mode override (e.g. from ``--mode``)

        Raises:
            ConfigError: If ``poll_interval`` or ``timeout`` is set but is not
                a positive number
        """
        merged = self.merged_options(target)
        if mode:
            merged["mode"] = mode

        dest = merged.get("dest") or DEFAULT_OPTIONS["dest"]
        merged["dest"] = self._resolve_path(dest)

        for option in POSITIVE_NUMBER_OPTIONS:
            value = merged.get(option)
            if value is not None and not _is_positive_number(value):
                raise ConfigError(
                    f"Target '{target}': options.{option} must be a positive number, got {value!r}"
                )

        files = expand_file_patterns(self.file_patterns(target), self.base_dir)
        return SyncOptions.from_dict(merged, files=files)

    def _resolve_path(self, value: str) -> str:
        if os.path.isabs(value):
            return value
        return os.path.normpath(os.path.join(self.base_dir, value))
