"""Layered workbench settings backed by ``settings.yml``."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .paths import UserDirs

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.yml"

OPEN_FOLDERS_IN_NEW_WINDOW = "window.openFoldersInNewWindow"
WINDOW_ORIGIN = "window.origin"
OPEN_FOLDERS_IN_NEW_WINDOW_VALUES = ("default", "on", "off")
DEFAULT_ORIGIN = "http://localhost:8080"

_DEFAULTS: dict[str, Any] = {
    OPEN_FOLDERS_IN_NEW_WINDOW: "default",
    WINDOW_ORIGIN: DEFAULT_ORIGIN,
}
_ENV_KEY_MAP: dict[str, str] = {
    OPEN_FOLDERS_IN_NEW_WINDOW: "WORKBENCH_OPEN_FOLDERS_IN_NEW_WINDOW",
    WINDOW_ORIGIN: "WORKBENCH_ORIGIN",
}


def default_settings_path() -> Path:
    return UserDirs().config_dir() / SETTINGS_FILE_NAME


@dataclass(frozen=True)
class WindowSettings:
    open_folders_in_new_window: str = "default"
    origin: str = DEFAULT_ORIGIN


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _lookup(data: Mapping[str, Any], dotted: str) -> Any | None:
    if dotted in data:
        return data[dotted]
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def _assign(data: dict[str, Any], dotted: str, value: Any) -> None:
    parts = dotted.split(".")
    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def normalize_open_folders_in_new_window(value: Any) -> str:
    """Map a raw setting onto ``default``/``on``/``off``.

    YAML 1.1 turns bare ``on``/``off`` into booleans, so those are mapped back.
    """
    if isinstance(value, bool):
        return "on" if value else "off"
    text = str(value).strip().lower() if value is not None else ""
    if text in OPEN_FOLDERS_IN_NEW_WINDOW_VALUES:
        return text
    if text:
        logger.warning("unknown %s value %r, using 'default'", OPEN_FOLDERS_IN_NEW_WINDOW, value)
    return "default"


@dataclass
class ConfigStore:
    """Resolve settings with overrides > environment > file > defaults."""

    path: Path = field(default_factory=default_settings_path)
    overrides: Mapping[str, Any] | None = None
    env: Mapping[str, str] | None = None
    _store: dict[str, Any] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()
        self.overrides = dict(self.overrides or {})
        self.env = os.environ if self.env is None else self.env
        self._store = _read_yaml(self.path)

    def get(self, key: str, default: Any | None = None) -> Any | None:
        if key in self.overrides:
            return self.overrides[key]
        env_name = _ENV_KEY_MAP.get(key)
        if env_name and (value := self.env.get(env_name)):
            return value
        value = _lookup(self._store, key)
        if value is not None:
            return value
        if default is not None:
            return default
        return _DEFAULTS.get(key)

    def set(self, key: str, value: Any) -> None:
        """Persist ``key`` into the settings file."""
        _assign(self._store, key, value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(self._store, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )

    def window_settings(self) -> WindowSettings:
        origin = str(self.get(WINDOW_ORIGIN) or DEFAULT_ORIGIN).rstrip("/")
        return WindowSettings(
            open_folders_in_new_window=normalize_open_folders_in_new_window(
                self.get(OPEN_FOLDERS_IN_NEW_WINDOW)
            ),
            origin=origin,
        )
