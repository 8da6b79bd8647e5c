"""Tests for the recently opened store."""

from __future__ import annotations

import asyncio
import json

import pytest

from workbench_core.events import RECENTLY_OPENED_CHANGED, EventBus
from workbench_core.history import (
    RECENTLY_OPENED_KEY,
    HistoryPersistError,
    RecentFile,
    RecentFolder,
    RecentHistory,
    RecentLocationStore,
    RecentWorkspace,
    decode_history,
    recent_file,
    recent_folder,
    recent_workspace,
)
from workbench_core.storage import InMemoryStorage, StorageScope
from workbench_core.uri import Resource
from workbench_core.workspace import WorkspaceContext, workspace_id_for


class _FailingStorage(InMemoryStorage):
    def __init__(self) -> None:
        super().__init__()
        self.fail = False
        self.writes = 0

    async def store(self, key: str, value: str, scope: StorageScope = StorageScope.GLOBAL) -> None:
        self.writes += 1
        if self.fail:
            raise OSError("disk full")
        await super().store(key, value, scope)


def _folders(history: RecentHistory) -> list[str]:
    return [str(entry.folder_uri) for entry in history.workspaces if isinstance(entry, RecentFolder)]


def test_adding_same_folder_twice_keeps_one_entry_in_front() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_folder("file:///x"), recent_folder("file:///y")])
        await store.add([recent_folder("file:///x")])
        return await store.get_recently_opened()

    history = asyncio.run(scenario())
    assert _folders(history) == ["file:///x", "file:///y"]


def test_last_added_entry_is_frontmost() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_folder("file:///a"), recent_folder("file:///b")])
        return await store.get_recently_opened()

    assert _folders(asyncio.run(scenario())) == ["file:///b", "file:///a"]


def test_re_adding_moves_entry_to_front() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_folder("file:///a")])
        await store.add([recent_folder("file:///b"), recent_folder("file:///a")])
        return await store.get_recently_opened()

    assert _folders(asyncio.run(scenario())) == ["file:///a", "file:///b"]


def test_files_and_workspaces_use_separate_lists() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add(
            [
                recent_file("file:///proj/a.py"),
                recent_workspace("file:///all.code-workspace", "ws"),
                recent_folder("file:///proj"),
            ]
        )
        return await store.get_recently_opened()

    history = asyncio.run(scenario())
    assert history.files == [RecentFile(file_uri=Resource.parse("file:///proj/a.py"))]
    assert [type(entry) for entry in history.workspaces] == [RecentFolder, RecentWorkspace]


def test_workspace_is_deduplicated_by_config_location() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_workspace("file:///w.code-workspace", "old-id")])
        await store.add([recent_workspace("file:///w.code-workspace", "new-id")])
        return await store.get_recently_opened()

    history = asyncio.run(scenario())
    assert len(history.workspaces) == 1
    entry = history.workspaces[0]
    assert isinstance(entry, RecentWorkspace)
    assert entry.workspace.id == "new-id"


def test_remove_only_touches_matching_list() -> None:
    async def scenario() -> tuple[RecentHistory, RecentHistory]:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_folder("file:///proj"), recent_file("file:///notes.txt")])
        await store.remove(["file:///missing"])
        unchanged = await store.get_recently_opened()
        await store.remove([Resource.parse("file:///notes.txt")])
        return unchanged, await store.get_recently_opened()

    unchanged, after = asyncio.run(scenario())
    assert len(unchanged.files) == 1 and len(unchanged.workspaces) == 1
    assert after.files == []
    assert _folders(after) == ["file:///proj"]


def test_remove_matches_workspace_config_location() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_workspace("file:///w.code-workspace"), recent_folder("file:///p")])
        await store.remove(["file:///w.code-workspace"])
        return await store.get_recently_opened()

    assert _folders(asyncio.run(scenario())) == ["file:///p"]


def test_location_matching_is_case_sensitive() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_folder("file:///Proj"), recent_folder("file:///proj")])
        return await store.get_recently_opened()

    assert _folders(asyncio.run(scenario())) == ["file:///proj", "file:///Proj"]


def test_every_mutation_persists_under_global_key() -> None:
    storage = InMemoryStorage()

    async def scenario() -> None:
        store = RecentLocationStore(storage)
        await store.add([recent_folder("file:///a"), recent_file("file:///a.txt")])
        persisted = decode_history(storage.snapshot()[RECENTLY_OPENED_KEY])
        assert persisted == await store.get_recently_opened()
        await store.remove(["file:///a"])
        persisted = decode_history(storage.snapshot()[RECENTLY_OPENED_KEY])
        assert persisted.workspaces == []
        await store.clear()

    asyncio.run(scenario())
    assert json.loads(storage.snapshot()[RECENTLY_OPENED_KEY]) == {"files": [], "workspaces": []}
    assert storage.snapshot(StorageScope.WORKSPACE) == {}


def test_history_is_restored_by_a_new_store() -> None:
    storage = InMemoryStorage()

    async def scenario() -> tuple[RecentHistory, RecentHistory]:
        first = RecentLocationStore(storage)
        await first.add([recent_folder("file:///a"), recent_workspace("file:///w.code-workspace")])
        await first.add([recent_file("file:///f")])
        second = RecentLocationStore(storage)
        return await first.get_recently_opened(), await second.get_recently_opened()

    original, restored = asyncio.run(scenario())
    assert restored == original


def test_corrupt_blob_reads_as_empty_history() -> None:
    storage = InMemoryStorage({StorageScope.GLOBAL: {RECENTLY_OPENED_KEY: "{broken"}})

    async def scenario() -> RecentHistory:
        store = RecentLocationStore(storage)
        history = await store.get_recently_opened()
        await store.add([recent_folder("file:///a")])
        return history

    assert asyncio.run(scenario()) == RecentHistory()
    assert "file:///a" in storage.snapshot()[RECENTLY_OPENED_KEY]


def test_entry_with_undecodable_location_does_not_block_writes() -> None:
    raw = '{"files": [{"fileUri": "file:///a\\ud800"}, {"fileUri": "file:///kept"}]}'
    storage = InMemoryStorage({StorageScope.GLOBAL: {RECENTLY_OPENED_KEY: raw}})

    async def scenario() -> RecentHistory:
        store = RecentLocationStore(storage)
        await store.add([recent_folder("file:///b")])
        return await store.get_recently_opened()

    history = asyncio.run(scenario())
    assert history.files == [RecentFile(file_uri=Resource.parse("file:///kept"))]
    assert history.workspaces == [RecentFolder(folder_uri=Resource.parse("file:///b"))]
    assert json.loads(storage.snapshot()[RECENTLY_OPENED_KEY])["files"] == [
        {"fileUri": "file:///kept"}
    ]


def test_failed_write_keeps_previous_history() -> None:
    storage = _FailingStorage()

    async def scenario() -> RecentHistory:
        store = RecentLocationStore(storage)
        await store.add([recent_folder("file:///a")])
        storage.fail = True
        with pytest.raises(HistoryPersistError):
            await store.add([recent_folder("file:///b")])
        with pytest.raises(HistoryPersistError):
            await store.clear()
        return await store.get_recently_opened()

    assert _folders(asyncio.run(scenario())) == ["file:///a"]
    assert storage.writes == 3


def test_returned_history_is_a_copy() -> None:
    async def scenario() -> RecentHistory:
        store = RecentLocationStore(InMemoryStorage())
        await store.add([recent_folder("file:///a")])
        snapshot = await store.get_recently_opened()
        snapshot.workspaces.clear()
        return await store.get_recently_opened()

    assert _folders(asyncio.run(scenario())) == ["file:///a"]


def test_mutations_emit_change_events() -> None:
    bus = EventBus()
    payloads: list[dict] = []
    bus.on(RECENTLY_OPENED_CHANGED, lambda event: payloads.append(event.payload))

    async def scenario() -> None:
        store = RecentLocationStore(InMemoryStorage(), events=bus)
        await store.add([recent_folder("file:///a"), recent_file("file:///b")])
        await store.remove(["file:///b"])

    asyncio.run(scenario())
    assert payloads == [{"workspaces": 1, "files": 1}, {"workspaces": 1, "files": 0}]


def test_record_workspace_follows_session_state() -> None:
    async def scenario() -> tuple[object, object, object, RecentHistory]:
        store = RecentLocationStore(InMemoryStorage())
        empty = await store.record_workspace(WorkspaceContext.empty())
        folder = await store.record_workspace(WorkspaceContext.for_folder("file:///proj"))
        workspace = await store.record_workspace(
            WorkspaceContext.for_workspace("file:///w.code-workspace", ["file:///a", "file:///b"])
        )
        return empty, folder, workspace, await store.get_recently_opened()

    empty, folder, workspace, history = asyncio.run(scenario())
    config = Resource.parse("file:///w.code-workspace")
    assert empty is None
    assert folder == RecentFolder(folder_uri=Resource.parse("file:///proj"))
    assert isinstance(workspace, RecentWorkspace)
    assert workspace.workspace.id == workspace_id_for(config)
    assert history.workspaces == [workspace, folder]
