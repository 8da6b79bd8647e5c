"""Route open requests to the current session or to a new one."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol, Sequence

from ..config import ConfigStore, WindowSettings
from ..events import WINDOW_NAVIGATED, EventBus
from ..history import RecentEntry, RecentLocationStore, recent_folder, recent_workspace
from ..uri import Resource
from .navigation import Navigator, navigation_address
from .policy import decide_new_window
from .types import (
    DispatchFailure,
    NavigationAction,
    NavigationKind,
    OpenFileTarget,
    OpenFolderTarget,
    OpenOptions,
    OpenReport,
    OpenRequest,
    OpenWorkspaceTarget,
)


class EditorOpener(Protocol):
    async def open_editors(self, resources: Sequence[Resource]) -> None:
        ...


SettingsSource = Callable[[], WindowSettings]


class WindowRouter:
    """Dispatch every target of an open request, best effort.

    Folders and workspaces turn into navigation actions, in a new window or
    the current one depending on one decision taken per request. The
    navigator may block, so it runs in a worker thread. Files are always
    handed to the editor opener of the current session. A failing
    target is reported on the returned ``OpenReport`` and the remaining
    targets are still processed.
    """

    def __init__(
        self,
        navigator: Navigator,
        editor_opener: EditorOpener,
        *,
        settings: ConfigStore | SettingsSource | None = None,
        recents: RecentLocationStore | None = None,
        events: EventBus | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._navigator = navigator
        self._editor_opener = editor_opener
        if isinstance(settings, ConfigStore):
            self._settings: SettingsSource = settings.window_settings
        else:
            self._settings = settings or WindowSettings
        self._recents = recents
        self._events = events
        self._logger = logger or logging.getLogger(__name__)

    def should_open_new_window(self, options: OpenOptions | None = None) -> bool:
        return decide_new_window(options, self._settings().open_folders_in_new_window)

    async def open(self, request: OpenRequest) -> OpenReport:
        settings = self._settings()
        new_window = decide_new_window(request.options, settings.open_folders_in_new_window)
        self._logger.debug(
            "opening %s target(s), new_window=%s", len(request.locations), new_window
        )

        actions: list[NavigationAction] = []
        opened_files: list[Resource] = []
        failures: list[DispatchFailure] = []
        for target in request.locations:
            try:
                if isinstance(target, OpenFolderTarget):
                    actions.append(
                        await self._navigate(settings.origin, NavigationKind.FOLDER, target.folder_uri, new_window)
                    )
                elif isinstance(target, OpenWorkspaceTarget):
                    actions.append(
                        await self._navigate(
                            settings.origin, NavigationKind.WORKSPACE, target.workspace_uri, new_window
                        )
                    )
                elif isinstance(target, OpenFileTarget):
                    await self._editor_opener.open_editors([target.file_uri])
                    opened_files.append(target.file_uri)
                else:
                    raise TypeError(f"unsupported open target: {target!r}")
            except Exception as exc:
                self._logger.warning("could not open %r: %s", target, exc)
                failures.append(DispatchFailure(target=target, error=exc))

        history_error = await self._remember(actions)
        return OpenReport(
            open_in_new_window=new_window,
            actions=tuple(actions),
            opened_files=tuple(opened_files),
            failures=tuple(failures),
            history_error=history_error,
        )

    async def _navigate(
        self, origin: str, kind: NavigationKind, target: Resource, new_window: bool
    ) -> NavigationAction:
        action = NavigationAction(
            kind=kind,
            target=target,
            address=navigation_address(origin, kind, target),
            new_window=new_window,
        )
        await asyncio.to_thread(self._navigator.navigate, action.address, new_window=new_window)
        if self._events is not None:
            self._events.emit(
                WINDOW_NAVIGATED,
                {"kind": kind.value, "address": action.address, "new_window": new_window},
            )
        return action

    async def _remember(self, actions: Sequence[NavigationAction]) -> Exception | None:
        if self._recents is None or not actions:
            return None
        entries: list[RecentEntry] = [
            recent_folder(action.target)
            if action.kind is NavigationKind.FOLDER
            else recent_workspace(action.target)
            for action in actions
        ]
        try:
            await self._recents.add(entries)
        except Exception as exc:
            self._logger.warning("could not record opened locations: %s", exc)
            return exc
        return None
