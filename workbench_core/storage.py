"""Scoped key/value persistence used for durable workbench state.

Values are opaque text blobs. The owner of a key decides its schema; the
storage only guarantees that one ``store`` call replaces the value as a whole.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageScope(str, Enum):
    GLOBAL = "global"
    WORKSPACE = "workspace"


class StorageError(RuntimeError):
    """Raised when a value cannot be written or removed."""


class KeyValueStorage(Protocol):
    async def get(self, key: str, scope: StorageScope = StorageScope.GLOBAL) -> str | None:
        ...

    async def store(self, key: str, value: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        ...

    async def remove(self, key: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        ...


class InMemoryStorage:
    """Process-local storage, mostly for tests and ephemeral sessions."""

    def __init__(self, initial: dict[StorageScope, dict[str, str]] | None = None) -> None:
        self._values: dict[StorageScope, dict[str, str]] = {scope: {} for scope in StorageScope}
        for scope, values in (initial or {}).items():
            self._values[StorageScope(scope)].update(values)

    async def get(self, key: str, scope: StorageScope = StorageScope.GLOBAL) -> str | None:
        return self._values[scope].get(key)

    async def store(self, key: str, value: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        if not isinstance(value, str):
            raise TypeError("storage values must be strings.")
        self._values[scope][key] = value

    async def remove(self, key: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        self._values[scope].pop(key, None)

    def snapshot(self, scope: StorageScope = StorageScope.GLOBAL) -> dict[str, str]:
        return dict(self._values[scope])


class JsonFileStorage:
    """One JSON object file per scope below ``root`` (``global.json``, ...)."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser()

    def path_for(self, scope: StorageScope) -> Path:
        return self.root / f"{StorageScope(scope).value}.json"

    async def get(self, key: str, scope: StorageScope = StorageScope.GLOBAL) -> str | None:
        values = await asyncio.to_thread(self._read, scope)
        value = values.get(key)
        return value if isinstance(value, str) else None

    async def store(self, key: str, value: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        if not isinstance(value, str):
            raise TypeError("storage values must be strings.")
        await asyncio.to_thread(self._update, scope, key, value)

    async def remove(self, key: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        await asyncio.to_thread(self._update, scope, key, None)

    def _read(self, scope: StorageScope) -> dict[str, object]:
        path = self.path_for(scope)
        if not path.exists():
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable storage file %s: %s", path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("ignoring storage file %s: expected a JSON object", path)
            return {}
        return payload

    def _update(self, scope: StorageScope, key: str, value: str | None) -> None:
        values = self._read(scope)
        if value is None:
            if key not in values:
                return
            values.pop(key)
        else:
            values[key] = value
        path = self.path_for(scope)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(values, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"could not write {path}: {exc}") from exc
