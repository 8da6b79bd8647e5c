"""Recently opened locations and window routing for the workbench."""

from .app import WorkbenchApp, WorkbenchStatus
from .config import ConfigStore, WindowSettings, default_settings_path
from .events import Event, EventBus
from .paths import UserDirs
from .storage import InMemoryStorage, JsonFileStorage, StorageError, StorageScope
from .uri import Resource, as_resource
from .workspace import WorkbenchState, WorkspaceContext

__all__ = [
    "WorkbenchApp",
    "WorkbenchStatus",
    "ConfigStore",
    "WindowSettings",
    "default_settings_path",
    "Event",
    "EventBus",
    "UserDirs",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
    "StorageScope",
    "Resource",
    "as_resource",
    "WorkbenchState",
    "WorkspaceContext",
]
