"""Platform-independent helpers for workbench paths."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

_DEFAULT_APP_NAME = "workbench"
_DEFAULT_APP_AUTHOR = "Workbench"
STORAGE_DIR_NAME = "storage"


@dataclass(frozen=True)
class UserDirs:
    """Expose the platform-configured locations for settings and durable state."""

    app_name: str = _DEFAULT_APP_NAME
    app_author: str = _DEFAULT_APP_AUTHOR
    config_dir_override: Path | None = None
    data_dir_override: Path | None = None

    def config_dir(self) -> Path:
        if self.config_dir_override:
            return Path(self.config_dir_override)
        return Path(user_config_dir(self.app_name, appauthor=self.app_author))

    def data_dir(self) -> Path:
        if self.data_dir_override:
            return Path(self.data_dir_override)
        return Path(user_data_dir(self.app_name, appauthor=self.app_author))

    def storage_dir(self) -> Path:
        """Directory holding the scoped key/value storage files."""
        return self.data_dir() / STORAGE_DIR_NAME
