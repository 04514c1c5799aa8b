"""Durable key/value state surviving restarts.

Holds the session token and the language preference. Values are strings.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

TOKEN_KEY = "adminToken"
LANGUAGE_KEY = "language"


class KeyValueStore(Protocol):
    """Persisted string key/value pairs."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process store. Used for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    Every write replaces the file atomically, so a crash never leaves a
    half-written state file behind.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._log = logger.bind(service="storage", path=str(self._path))
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            self._log.warning("storage.load_failed", error=str(e))
            return {}
        if not isinstance(raw, dict):
            self._log.warning("storage.unexpected_format")
            return {}
        return {str(k): str(v) for k, v in raw.items() if v is not None}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent, prefix=".state-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()
