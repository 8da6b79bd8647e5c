"""Descriptor for what the current session has open."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .uri import Resource, as_resource


class WorkbenchState(str, Enum):
    EMPTY = "empty"
    FOLDER = "folder"
    WORKSPACE = "workspace"


def workspace_id_for(config_location: Resource) -> str:
    """Stable identifier for a multi-root workspace given its config file."""

    digest = hashlib.md5(config_location.to_string().encode("utf-8"), usedforsecurity=False)
    return digest.hexdigest()


@dataclass(frozen=True)
class WorkspaceContext:
    """Thin descriptor of the folders or workspace loaded in this session."""

    folders: tuple[Resource, ...] = ()
    workspace_id: str | None = None
    configuration: Resource | None = None

    @property
    def state(self) -> WorkbenchState:
        if self.configuration is not None:
            return WorkbenchState.WORKSPACE
        if self.folders:
            return WorkbenchState.FOLDER
        return WorkbenchState.EMPTY

    @classmethod
    def empty(cls) -> "WorkspaceContext":
        return cls()

    @classmethod
    def for_folder(cls, folder: Resource | str) -> "WorkspaceContext":
        return cls(folders=(as_resource(folder),))

    @classmethod
    def for_workspace(
        cls,
        configuration: Resource | str,
        folders: Sequence[Resource | str] = (),
        *,
        workspace_id: str | None = None,
    ) -> "WorkspaceContext":
        config = as_resource(configuration)
        return cls(
            folders=tuple(as_resource(folder) for folder in folders),
            workspace_id=workspace_id or workspace_id_for(config),
            configuration=config,
        )
