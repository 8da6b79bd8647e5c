"""Tests for WorkbenchApp wiring."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

from workbench_core.app import WorkbenchApp
from workbench_core.history import RecentFolder
from workbench_core.paths import UserDirs
from workbench_core.routing import OpenRequest, folder_target
from workbench_core.storage import InMemoryStorage
from workbench_core.uri import Resource
from workbench_core.workspace import WorkspaceContext


class _Editors:
    async def open_editors(self, resources: Sequence[Resource]) -> None:
        return None


class _Navigator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []

    def navigate(self, address: str, *, new_window: bool) -> None:
        self.calls.append((address, new_window))


def _user_dirs(tmp_path: Path) -> UserDirs:
    return UserDirs(config_dir_override=tmp_path / "config", data_dir_override=tmp_path / "data")


def test_startup_records_current_folder(tmp_path: Path) -> None:
    app = WorkbenchApp(
        editor_opener=_Editors(),
        navigator=_Navigator(),
        workspace=WorkspaceContext.for_folder("file:///proj"),
        user_dirs=_user_dirs(tmp_path),
    )

    status = asyncio.run(app.startup())

    assert status.recorded == RecentFolder(folder_uri=Resource.parse("file:///proj"))
    assert status.recent_workspaces == 1
    assert (tmp_path / "data" / "storage" / "global.json").is_file()


def test_startup_with_empty_session_records_nothing(tmp_path: Path) -> None:
    app = WorkbenchApp(
        editor_opener=_Editors(),
        navigator=_Navigator(),
        user_dirs=_user_dirs(tmp_path),
        storage=InMemoryStorage(),
    )
    status = asyncio.run(app.startup())
    assert status.recorded is None
    assert status.recent_workspaces == 0


def test_router_uses_settings_file(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.yml").write_text(
        "window:\n  openFoldersInNewWindow: on\n  origin: http://ide:1234\n",
        encoding="utf-8",
    )
    navigator = _Navigator()
    app = WorkbenchApp(
        editor_opener=_Editors(),
        navigator=navigator,
        user_dirs=_user_dirs(tmp_path),
        storage=InMemoryStorage(),
    )

    async def scenario():
        await app.router.open(OpenRequest(locations=(folder_target("file:///proj"),)))
        return await app.recents.get_recently_opened()

    history = asyncio.run(scenario())
    assert navigator.calls == [("http://ide:1234/?folder=/proj", True)]
    assert history.workspaces == [RecentFolder(folder_uri=Resource.parse("file:///proj"))]
    assert app.status()["open_folders_in_new_window"] == "on"
