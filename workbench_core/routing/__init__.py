"""Window routing for open requests."""

from .errors import RoutingError, WindowOpenError
from .navigation import BrowserNavigator, Navigator, navigation_address
from .policy import decide_new_window
from .router import EditorOpener, WindowRouter
from .types import (
    DispatchFailure,
    NavigationAction,
    NavigationKind,
    OpenFileTarget,
    OpenFolderTarget,
    OpenOptions,
    OpenReport,
    OpenRequest,
    OpenTarget,
    OpenWorkspaceTarget,
    file_target,
    folder_target,
    workspace_target,
)

__all__ = [
    "WindowRouter",
    "EditorOpener",
    "Navigator",
    "BrowserNavigator",
    "navigation_address",
    "decide_new_window",
    "OpenTarget",
    "OpenFolderTarget",
    "OpenWorkspaceTarget",
    "OpenFileTarget",
    "OpenOptions",
    "OpenRequest",
    "OpenReport",
    "NavigationAction",
    "NavigationKind",
    "DispatchFailure",
    "folder_target",
    "workspace_target",
    "file_target",
    "RoutingError",
    "WindowOpenError",
]
