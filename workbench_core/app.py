"""Application object that wires together the workbench core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from workbench_core.config import SETTINGS_FILE_NAME, ConfigStore
from workbench_core.events import EventBus
from workbench_core.history import RecentEntry, RecentLocationStore
from workbench_core.paths import UserDirs
from workbench_core.routing import BrowserNavigator, EditorOpener, Navigator, WindowRouter
from workbench_core.storage import JsonFileStorage, KeyValueStorage
from workbench_core.workspace import WorkspaceContext


@dataclass(frozen=True)
class WorkbenchStatus:
    workspace: WorkspaceContext
    recorded: RecentEntry | None
    recent_workspaces: int
    recent_files: int


class WorkbenchApp:
    """Entry point that glues settings, storage, history and routing."""

    def __init__(
        self,
        *,
        editor_opener: EditorOpener,
        navigator: Navigator | None = None,
        workspace: WorkspaceContext | None = None,
        user_dirs: UserDirs | None = None,
        storage: KeyValueStorage | None = None,
        config: ConfigStore | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("workbench_core.app")
        self.user_dirs = user_dirs or UserDirs()
        self.workspace = workspace or WorkspaceContext.empty()
        self.config = config or ConfigStore(path=self.user_dirs.config_dir() / SETTINGS_FILE_NAME)
        self.storage = storage or JsonFileStorage(self.user_dirs.storage_dir())
        self.events = EventBus(logger=self.logger.getChild("events"))
        self.recents = RecentLocationStore(
            self.storage,
            events=self.events,
            logger=self.logger.getChild("history"),
        )
        self.router = WindowRouter(
            navigator or BrowserNavigator(),
            editor_opener,
            settings=self.config,
            recents=self.recents,
            events=self.events,
            logger=self.logger.getChild("routing"),
        )

    async def startup(self) -> WorkbenchStatus:
        """Record the session's folder or workspace as most recently opened."""

        recorded = await self.recents.record_workspace(self.workspace)
        if recorded is not None:
            self.logger.debug("recorded %s as recently opened", recorded)
        history = await self.recents.get_recently_opened()
        return WorkbenchStatus(
            workspace=self.workspace,
            recorded=recorded,
            recent_workspaces=len(history.workspaces),
            recent_files=len(history.files),
        )

    def status(self) -> dict[str, str]:
        window = self.config.window_settings()
        return {
            "workspace_state": self.workspace.state.value,
            "settings": str(self.config.path),
            "storage": str(getattr(self.storage, "root", type(self.storage).__name__)),
            "open_folders_in_new_window": window.open_folders_in_new_window,
            "origin": window.origin,
        }
