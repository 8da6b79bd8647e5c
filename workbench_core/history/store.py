"""Recently opened files, folders and workspaces, persisted process-wide."""

from __future__ import annotations

import logging
from typing import Iterable

from ..events import RECENTLY_OPENED_CHANGED, EventBus
from ..storage import KeyValueStorage, StorageScope
from ..uri import Resource, as_resource
from ..workspace import WorkbenchState, WorkspaceContext, workspace_id_for
from .codec import decode_history, encode_history
from .errors import HistoryPersistError
from .types import (
    RecentEntry,
    RecentFile,
    RecentFolder,
    RecentHistory,
    RecentWorkspace,
    WorkspaceIdentifier,
)

RECENTLY_OPENED_KEY = "recently.opened"


class RecentLocationStore:
    """Owner of the ``recently.opened`` key in global storage.

    The history is loaded from storage on first use and cached. Every mutation
    builds the new history, writes it with a single ``store`` call and only
    then replaces the cached copy, so a failed write leaves the store exactly
    as it was. Location matching is case-sensitive on the normalized string.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        events: EventBus | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._storage = storage
        self._events = events
        self._logger = logger or logging.getLogger(__name__)
        self._history: RecentHistory | None = None

    async def get_recently_opened(self) -> RecentHistory:
        return (await self._load()).copy()

    async def add(self, recents: Iterable[RecentEntry]) -> None:
        """Move each entry to the front of its list, in the given order."""

        updated = (await self._load()).copy()
        for recent in recents:
            updated.push(recent)
        await self._save(updated)

    async def remove(self, locations: Iterable[Resource | str]) -> None:
        updated = (await self._load()).copy()
        updated.remove_locations([as_resource(location) for location in locations])
        await self._save(updated)

    async def clear(self) -> None:
        await self._load()
        await self._save(RecentHistory())

    async def record_workspace(self, context: WorkspaceContext) -> RecentEntry | None:
        """Remember what the current session has open, if anything."""

        state = context.state
        entry: RecentEntry | None = None
        if state is WorkbenchState.FOLDER:
            entry = RecentFolder(folder_uri=context.folders[0])
        elif state is WorkbenchState.WORKSPACE and context.configuration is not None:
            entry = RecentWorkspace(
                workspace=WorkspaceIdentifier(
                    id=context.workspace_id or workspace_id_for(context.configuration),
                    config_path=context.configuration,
                )
            )
        if entry is not None:
            await self.add([entry])
        return entry

    async def _load(self) -> RecentHistory:
        if self._history is None:
            raw = await self._storage.get(RECENTLY_OPENED_KEY, StorageScope.GLOBAL)
            self._history = decode_history(raw, self._logger)
            self._logger.debug(
                "loaded %s recent workspaces and %s recent files",
                len(self._history.workspaces),
                len(self._history.files),
            )
        return self._history

    async def _save(self, history: RecentHistory) -> None:
        payload = encode_history(history)
        try:
            await self._storage.store(RECENTLY_OPENED_KEY, payload, StorageScope.GLOBAL)
        except Exception as exc:
            raise HistoryPersistError(f"could not persist recently opened: {exc}") from exc
        self._history = history
        if self._events is not None:
            self._events.emit(
                RECENTLY_OPENED_CHANGED,
                {"workspaces": len(history.workspaces), "files": len(history.files)},
            )


def recent_file(location: Resource | str) -> RecentFile:
    return RecentFile(file_uri=as_resource(location))


def recent_folder(location: Resource | str) -> RecentFolder:
    return RecentFolder(folder_uri=as_resource(location))


def recent_workspace(config_location: Resource | str, workspace_id: str | None = None) -> RecentWorkspace:
    config = as_resource(config_location)
    return RecentWorkspace(
        workspace=WorkspaceIdentifier(id=workspace_id or workspace_id_for(config), config_path=config)
    )
