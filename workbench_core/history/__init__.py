"""Recently opened history for the workbench."""

from .codec import decode_history, encode_history, restore_recently_opened, to_store_data
from .errors import HistoryError, HistoryPersistError
from .store import (
    RECENTLY_OPENED_KEY,
    RecentLocationStore,
    recent_file,
    recent_folder,
    recent_workspace,
)
from .types import (
    RecentEntry,
    RecentFile,
    RecentFolder,
    RecentHistory,
    RecentWorkspace,
    RecentWorkspaceEntry,
    WorkspaceIdentifier,
    entry_location,
)

__all__ = [
    "RECENTLY_OPENED_KEY",
    "RecentLocationStore",
    "RecentEntry",
    "RecentFile",
    "RecentFolder",
    "RecentWorkspace",
    "RecentWorkspaceEntry",
    "RecentHistory",
    "WorkspaceIdentifier",
    "entry_location",
    "recent_file",
    "recent_folder",
    "recent_workspace",
    "to_store_data",
    "restore_recently_opened",
    "encode_history",
    "decode_history",
    "HistoryError",
    "HistoryPersistError",
]
