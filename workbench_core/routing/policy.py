"""New-window versus reuse-window decision for folder and workspace opens."""

from __future__ import annotations

from .types import OpenOptions


def decide_new_window(options: OpenOptions | None, open_folders_in_new_window: str = "default") -> bool:
    """Return whether folders/workspaces of one request open in a new window.

    Force flags always win over the ``window.openFoldersInNewWindow`` setting.
    ``force_new_window`` wins when both flags are set; ``force_reuse_window``
    alone keeps the current window. Without flags, ``on`` opens a new window
    and ``off`` or ``default`` reuses the current one.
    """
    options = options or OpenOptions()
    if options.force_new_window:
        return True
    if options.force_reuse_window:
        return False
    if open_folders_in_new_window == "on":
        return True
    if open_folders_in_new_window == "off":
        return False
    return False
