"""Open requests, routing outcomes and navigation actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..uri import Resource, as_resource
from .errors import WindowOpenError


@dataclass(frozen=True)
class OpenFolderTarget:
    folder_uri: Resource


@dataclass(frozen=True)
class OpenWorkspaceTarget:
    workspace_uri: Resource


@dataclass(frozen=True)
class OpenFileTarget:
    file_uri: Resource


OpenTarget = Union[OpenFolderTarget, OpenWorkspaceTarget, OpenFileTarget]


def folder_target(location: Resource | str) -> OpenFolderTarget:
    return OpenFolderTarget(folder_uri=as_resource(location))


def workspace_target(location: Resource | str) -> OpenWorkspaceTarget:
    return OpenWorkspaceTarget(workspace_uri=as_resource(location))


def file_target(location: Resource | str) -> OpenFileTarget:
    return OpenFileTarget(file_uri=as_resource(location))


@dataclass(frozen=True)
class OpenOptions:
    force_new_window: bool = False
    force_reuse_window: bool = False


@dataclass(frozen=True)
class OpenRequest:
    locations: tuple[OpenTarget, ...]
    options: OpenOptions = field(default_factory=OpenOptions)

    def __post_init__(self) -> None:
        object.__setattr__(self, "locations", tuple(self.locations))


class NavigationKind(str, Enum):
    FOLDER = "folder"
    WORKSPACE = "workspace"


@dataclass(frozen=True)
class NavigationAction:
    """A request to point a session at a folder or workspace address."""

    kind: NavigationKind
    target: Resource
    address: str
    new_window: bool


@dataclass(frozen=True)
class DispatchFailure:
    target: OpenTarget
    error: Exception


@dataclass(frozen=True)
class OpenReport:
    """What ``WindowRouter.open`` did for one request."""

    open_in_new_window: bool
    actions: tuple[NavigationAction, ...] = ()
    opened_files: tuple[Resource, ...] = ()
    failures: tuple[DispatchFailure, ...] = ()
    history_error: Exception | None = None

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise WindowOpenError(self.failures)
