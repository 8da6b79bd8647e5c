"""Recently opened entries and the history that orders them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..uri import Resource


@dataclass(frozen=True)
class WorkspaceIdentifier:
    id: str
    config_path: Resource

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("workspace id cannot be empty.")


@dataclass(frozen=True)
class RecentFile:
    file_uri: Resource


@dataclass(frozen=True)
class RecentFolder:
    folder_uri: Resource


@dataclass(frozen=True)
class RecentWorkspace:
    workspace: WorkspaceIdentifier


RecentEntry = Union[RecentFile, RecentFolder, RecentWorkspace]
RecentWorkspaceEntry = Union[RecentFolder, RecentWorkspace]


def entry_location(entry: RecentEntry) -> Resource:
    """Return the location that identifies ``entry`` for de-duplication."""

    if isinstance(entry, RecentFile):
        return entry.file_uri
    if isinstance(entry, RecentFolder):
        return entry.folder_uri
    if isinstance(entry, RecentWorkspace):
        return entry.workspace.config_path
    raise TypeError(f"not a recent entry: {entry!r}")


@dataclass
class RecentHistory:
    """Most-recent-first files and folders/workspaces."""

    workspaces: list[RecentWorkspaceEntry] = field(default_factory=list)
    files: list[RecentFile] = field(default_factory=list)

    def copy(self) -> "RecentHistory":
        return RecentHistory(workspaces=list(self.workspaces), files=list(self.files))

    def is_empty(self) -> bool:
        return not self.workspaces and not self.files

    def remove_locations(self, locations: list[Resource]) -> None:
        keys = {location.to_string() for location in locations}
        if not keys:
            return
        self.files = [entry for entry in self.files if entry.file_uri.to_string() not in keys]
        self.workspaces = [
            entry for entry in self.workspaces if entry_location(entry).to_string() not in keys
        ]

    def push(self, entry: RecentEntry) -> None:
        """Move ``entry`` to the front of the list it belongs to."""

        self.remove_locations([entry_location(entry)])
        if isinstance(entry, RecentFile):
            self.files.insert(0, entry)
        elif isinstance(entry, (RecentFolder, RecentWorkspace)):
            self.workspaces.insert(0, entry)
        else:
            raise TypeError(f"not a recent entry: {entry!r}")
