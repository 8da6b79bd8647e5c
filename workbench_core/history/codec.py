"""JSON projection of the recently opened history.

Stored shape::

    {
      "files": [{"fileUri": "file:///a.txt"}],
      "workspaces": [
        {"folderUri": "file:///proj"},
        {"workspace": {"id": "...", "configPath": "file:///x.code-workspace"}}
      ]
    }

Restoring is lenient: unknown keys are ignored, missing lists read as empty
and malformed entries are dropped with a warning.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from ..uri import Resource
from .types import (
    RecentEntry,
    RecentFile,
    RecentFolder,
    RecentHistory,
    RecentWorkspace,
    RecentWorkspaceEntry,
    WorkspaceIdentifier,
)

_logger = logging.getLogger(__name__)


def entry_to_dict(entry: RecentEntry) -> dict[str, Any]:
    if isinstance(entry, RecentFile):
        return {"fileUri": entry.file_uri.to_string()}
    if isinstance(entry, RecentFolder):
        return {"folderUri": entry.folder_uri.to_string()}
    if isinstance(entry, RecentWorkspace):
        return {
            "workspace": {
                "id": entry.workspace.id,
                "configPath": entry.workspace.config_path.to_string(),
            }
        }
    raise TypeError(f"not a recent entry: {entry!r}")


def to_store_data(history: RecentHistory) -> dict[str, list[dict[str, Any]]]:
    return {
        "files": [entry_to_dict(entry) for entry in history.files],
        "workspaces": [entry_to_dict(entry) for entry in history.workspaces],
    }


def _require_uri(raw: Mapping[str, Any], key: str) -> Resource:
    value = raw.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return Resource.parse(value)


def _file_from_dict(raw: Any) -> RecentFile:
    if not isinstance(raw, Mapping) or "fileUri" not in raw:
        raise ValueError("expected an object with fileUri")
    return RecentFile(file_uri=_require_uri(raw, "fileUri"))


def _workspace_entry_from_dict(raw: Any) -> RecentWorkspaceEntry:
    if not isinstance(raw, Mapping):
        raise ValueError("expected an object")
    if "folderUri" in raw:
        return RecentFolder(folder_uri=_require_uri(raw, "folderUri"))
    workspace = raw.get("workspace")
    if isinstance(workspace, Mapping):
        workspace_id = workspace.get("id")
        if not isinstance(workspace_id, str):
            raise ValueError("workspace.id must be a string")
        return RecentWorkspace(
            workspace=WorkspaceIdentifier(
                id=workspace_id,
                config_path=_require_uri(workspace, "configPath"),
            )
        )
    raise ValueError("expected folderUri or workspace")


def restore_recently_opened(
    data: Any, logger: logging.Logger | None = None
) -> RecentHistory:
    """Rebuild a history from its stored projection."""

    log = logger or _logger
    history = RecentHistory()
    if not isinstance(data, Mapping):
        log.warning("recently opened data is not an object, starting empty")
        return history

    files = data.get("files")
    for index, raw in enumerate(files if isinstance(files, list) else []):
        try:
            history.files.append(_file_from_dict(raw))
        except (TypeError, ValueError) as exc:
            log.warning("skipping recent file #%s: %s", index, exc)

    workspaces = data.get("workspaces")
    for index, raw in enumerate(workspaces if isinstance(workspaces, list) else []):
        try:
            history.workspaces.append(_workspace_entry_from_dict(raw))
        except (TypeError, ValueError) as exc:
            log.warning("skipping recent workspace #%s: %s", index, exc)
    return history


def encode_history(history: RecentHistory) -> str:
    return json.dumps(to_store_data(history), ensure_ascii=False)


def decode_history(raw: str | None, logger: logging.Logger | None = None) -> RecentHistory:
    """Parse a stored blob; never raises on bad content."""

    log = logger or _logger
    if not raw:
        return RecentHistory()
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        log.warning("could not parse recently opened data, starting empty: %s", exc)
        return RecentHistory()
    return restore_recently_opened(data, log)
