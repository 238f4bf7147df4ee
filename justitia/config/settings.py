"""
Justitia Settings Store

Loads the node settings file (config/config.json under the deployment root)
once, and resolves dotted paths such as ``blockchain.statePath`` against the
parsed tree.

Given a file like::

    {"class": {"student": {"name": "john"}}}

``store.get("class.student.name")`` returns ``"john"``.
"""

from __future__ import annotations

import json
import threading
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Optional, Tuple, Type, Union

from ..constants import CONFIG_DIR, CONFIG_NAME
from ..exceptions import MissingSettingError, SettingsFileError, SettingTypeError
from ..logger import get_logger

logger = get_logger(__name__)

# Deployment root: the directory holding the `justitia` package
DEPLOYMENT_ROOT = Path(__file__).resolve().parent.parent.parent


class _Missing:
    """Sentinel for a path that does not resolve to any value."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class LookupStatus(Enum):
    FOUND = "found"
    MISSING = "missing"
    WRONG_TYPE = "wrong_type"


@dataclass(frozen=True)
class Lookup:
    """
    Outcome of a typed lookup.

    Distinguishes a missing key from a value of the wrong kind so callers do
    not rely on conversion failures.
    """
    path: str
    status: LookupStatus
    value: Any = None
    expected: str = ""

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def require(self) -> Any:
        """Return the value, or raise the matching configuration error."""
        if self.status is LookupStatus.MISSING:
            raise MissingSettingError(self.path)
        if self.status is LookupStatus.WRONG_TYPE:
            raise SettingTypeError(self.path, self.expected, self.value)
        return self.value


def _freeze(value: Any) -> Any:
    """Recursively convert parsed data into read-only containers."""
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _matches(value: Any, kind: Union[Type, Tuple[Type, ...]]) -> bool:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if isinstance(value, bool) and bool not in kinds:
        return False
    if dict in kinds and isinstance(value, Mapping):
        return True
    return isinstance(value, kinds)


def _kind_name(kind: Union[Type, Tuple[Type, ...]]) -> str:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    return " or ".join(k.__name__ for k in kinds)


class SettingsStore:
    """
    Lazily-loaded, read-only view over the node settings file.

    The file is parsed the first time a value is requested and never re-read
    for the lifetime of the instance.
    """

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        root: Optional[Union[str, Path]] = None,
    ):
        self._root = Path(root) if root is not None else DEPLOYMENT_ROOT
        self._file_path = Path(file_path) if file_path is not None else Path(CONFIG_DIR + CONFIG_NAME)
        self._tree: Optional[Mapping[str, Any]] = None
        self._load_lock = threading.Lock()
        self.load_count = 0

    @property
    def file_path(self) -> Path:
        return self.resolve_absolute_path()

    @property
    def is_loaded(self) -> bool:
        return self._tree is not None

    def resolve_absolute_path(self) -> Path:
        """Resolve the configured path against the deployment root."""
        path = self._file_path.expanduser()
        if not path.is_absolute():
            path = self._root / path
        return path.resolve()

    def load(self) -> Mapping[str, Any]:
        """
        Read and parse the settings file.

        Raises:
            SettingsFileError: file missing, unreadable or malformed
        """
        path = self.resolve_absolute_path()
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raise SettingsFileError(path, "file not found") from None
        except OSError as e:
            raise SettingsFileError(path, e.strerror or str(e)) from e

        try:
            if path.suffix == ".toml":
                data = tomllib.loads(raw.decode("utf-8"))
            else:
                data = json.loads(raw)
        except ValueError as e:
            raise SettingsFileError(path, f"malformed content: {e}") from e

        if not isinstance(data, dict):
            raise SettingsFileError(path, f"top level must be an object, got {type(data).__name__}")

        self.load_count += 1
        logger.info(f"Loaded settings from {path}")
        return _freeze(data)

    def _ensure_loaded(self) -> Mapping[str, Any]:
        if self._tree is None:
            with self._load_lock:
                if self._tree is None:
                    self._tree = self.load()
        return self._tree

    def get(self, path: str, default: Any = MISSING) -> Any:
        """
        Return the raw value at a dotted path, or ``default`` if not found.

        When a non-object value is met before the path is exhausted, that
        value is returned as a best-effort partial result.
        """
        keys = path.split(".")
        if len(keys) == 1:
            return self._ensure_loaded().get(path, default)

        value, _ = self._walk(keys)
        return default if value is MISSING else value

    def _walk(self, keys: List[str]) -> Tuple[Any, int]:
        """
        Follow ``keys`` from the top of the tree.

        Returns the value reached and the number of keys consumed; fewer than
        ``len(keys)`` means a non-object value cut the walk short.
        """
        value = self._ensure_loaded().get(keys[0], MISSING)
        for depth, key in enumerate(keys[1:], start=1):
            if not isinstance(value, Mapping):
                return value, depth
            value = value.get(key, MISSING)
        return value, len(keys)

    def lookup(self, path: str, kind: Union[Type, Tuple[Type, ...]]) -> Lookup:
        """
        Typed lookup returning a tagged :class:`Lookup` outcome.

        A walk cut short by a non-object section is WRONG_TYPE for that
        section, never a value for the full path.
        """
        keys = path.split(".")
        value, depth = self._walk(keys)
        if value is MISSING or value is None:
            return Lookup(path, LookupStatus.MISSING, expected=_kind_name(kind))
        if depth < len(keys):
            return Lookup(".".join(keys[:depth]), LookupStatus.WRONG_TYPE, value, "an object")
        if not _matches(value, kind):
            return Lookup(path, LookupStatus.WRONG_TYPE, value, _kind_name(kind))
        return Lookup(path, LookupStatus.FOUND, value, _kind_name(kind))

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not MISSING
