"""Key-value stores backing the exam repository."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import re
from threading import Lock
from typing import Protocol

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageError(RuntimeError):
    """Raised when a value cannot be written to, or read from, the store."""


class KeyValueStore(Protocol):
    """Opaque string store addressed by key."""

    def load(self, key: str) -> str | None: ...

    def save(self, key: str, value: str) -> None: ...


class InMemoryStore:
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def load(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value


class JsonFileStore:
    """Stores each key as ``<key>.json`` inside a directory.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written document behind.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._lock = Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    def load(self, key: str) -> str | None:
        path = self._path_for(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                return path.read_text(encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"Could not read {path}: {exc}") from exc

    def save(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temp_path = path.with_suffix(".json.tmp")
        with self._lock:
            try:
                self._directory.mkdir(parents=True, exist_ok=True)
                temp_path.write_text(value, encoding="utf-8")
                os.replace(temp_path, path)
            except OSError as exc:
                raise StorageError(f"Could not write {path}: {exc}") from exc
        logger.debug("Saved %s (%d bytes)", path, len(value))

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self._directory / f"{key}.json"
