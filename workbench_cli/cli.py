"""Developer command line for the recently opened registry and window routing."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Sequence

from workbench_core.app import WorkbenchApp
from workbench_core.history import (
    HistoryPersistError,
    RecentEntry,
    RecentFile,
    RecentFolder,
    RecentHistory,
    RecentWorkspace,
    entry_location,
    recent_file,
    recent_folder,
    recent_workspace,
    to_store_data,
)
from workbench_core.paths import UserDirs
from workbench_core.routing import (
    OpenOptions,
    OpenRequest,
    OpenTarget,
    file_target,
    folder_target,
    workspace_target,
)
from workbench_core.uri import Resource

CLI_VERSION = "0.1.0"


class _PrintingEditorOpener:
    """Editors are not part of this tool; report what would be opened."""

    async def open_editors(self, resources: Sequence[Resource]) -> None:
        for resource in resources:
            print(f"[workbench:open] editor {resource}")


class _PrintingNavigator:
    def navigate(self, address: str, *, new_window: bool) -> None:
        target = "new window" if new_window else "current window"
        print(f"[workbench:open] {target} {address}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workbench",
        description="Inspect recently opened locations and route open requests.",
    )
    parser.add_argument("--version", action="version", version=f"workbench v{CLI_VERSION}")
    parser.add_argument("--data-dir", type=Path, help="directory holding durable state")
    parser.add_argument("--config-dir", type=Path, help="directory holding settings.yml")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = False

    recent = subparsers.add_parser("recent", help="manage recently opened locations")
    recent_sub = recent.add_subparsers(dest="recent_cmd", required=True)

    recent_list = recent_sub.add_parser("list", help="show recently opened locations")
    recent_list.add_argument("--format", choices=["text", "json"], default="text")
    recent_list.set_defaults(func=_handle_recent_list)

    recent_add = recent_sub.add_parser("add", help="mark locations as recently opened")
    _add_kind_flags(recent_add)
    recent_add.add_argument("locations", nargs="+", help="URIs or local paths")
    recent_add.set_defaults(func=_handle_recent_add)

    recent_remove = recent_sub.add_parser("remove", help="forget locations")
    recent_remove.add_argument("locations", nargs="+", help="URIs or local paths")
    recent_remove.set_defaults(func=_handle_recent_remove)

    recent_clear = recent_sub.add_parser("clear", help="forget everything")
    recent_clear.set_defaults(func=_handle_recent_clear)

    open_cmd = subparsers.add_parser("open", help="route locations to a window")
    _add_kind_flags(open_cmd)
    window = open_cmd.add_mutually_exclusive_group()
    window.add_argument("--new-window", action="store_true", dest="force_new_window")
    window.add_argument("--reuse-window", action="store_true", dest="force_reuse_window")
    open_cmd.add_argument(
        "--dry-run",
        action="store_true",
        help="print navigation actions instead of launching a browser",
    )
    open_cmd.add_argument("locations", nargs="+", help="URIs or local paths")
    open_cmd.set_defaults(func=_handle_open)

    status_cmd = subparsers.add_parser("status", help="show resolved settings")
    status_cmd.set_defaults(func=_handle_status)

    return parser


def _add_kind_flags(parser: argparse.ArgumentParser) -> None:
    kind = parser.add_mutually_exclusive_group()
    kind.add_argument("--file", action="store_const", const="file", dest="kind")
    kind.add_argument("--folder", action="store_const", const="folder", dest="kind")
    kind.add_argument("--workspace", action="store_const", const="workspace", dest="kind")
    parser.set_defaults(kind="folder")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level, logging.WARNING))
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    return func(args)


def _build_app(args: argparse.Namespace, *, dry_run: bool = True) -> WorkbenchApp:
    user_dirs = UserDirs(config_dir_override=args.config_dir, data_dir_override=args.data_dir)
    return WorkbenchApp(
        editor_opener=_PrintingEditorOpener(),
        navigator=_PrintingNavigator() if dry_run else None,
        user_dirs=user_dirs,
    )


def _entry_for(kind: str, location: str) -> RecentEntry:
    if kind == "file":
        return recent_file(location)
    if kind == "workspace":
        return recent_workspace(location)
    return recent_folder(location)


def _target_for(kind: str, location: str) -> OpenTarget:
    if kind == "file":
        return file_target(location)
    if kind == "workspace":
        return workspace_target(location)
    return folder_target(location)


def _describe(entry: RecentEntry) -> str:
    if isinstance(entry, RecentFile):
        label = "file"
    elif isinstance(entry, RecentFolder):
        label = "folder"
    elif isinstance(entry, RecentWorkspace):
        label = "workspace"
    else:
        raise TypeError(f"not a recent entry: {entry!r}")
    return f"{label:<9} {entry_location(entry)}"


def _print_history(history: RecentHistory, fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(to_store_data(history), indent=2))
        return
    if history.is_empty():
        print("[workbench:recent] nothing recently opened")
        return
    for entry in [*history.workspaces, *history.files]:
        print(f"[workbench:recent] {_describe(entry)}")


def _handle_recent_list(args: argparse.Namespace) -> int:
    app = _build_app(args)
    history = asyncio.run(app.recents.get_recently_opened())
    _print_history(history, args.format)
    return 0


def _handle_recent_add(args: argparse.Namespace) -> int:
    app = _build_app(args)
    try:
        entries = [_entry_for(args.kind, location) for location in args.locations]
        asyncio.run(app.recents.add(entries))
    except (HistoryPersistError, ValueError) as exc:
        print(f"[workbench:recent] {exc}")
        return 1
    print(f"[workbench:recent] added {len(entries)} location(s)")
    return 0


def _handle_recent_remove(args: argparse.Namespace) -> int:
    app = _build_app(args)
    try:
        asyncio.run(app.recents.remove(args.locations))
    except (HistoryPersistError, ValueError) as exc:
        print(f"[workbench:recent] {exc}")
        return 1
    print(f"[workbench:recent] removed {len(args.locations)} location(s)")
    return 0


def _handle_recent_clear(args: argparse.Namespace) -> int:
    app = _build_app(args)
    try:
        asyncio.run(app.recents.clear())
    except HistoryPersistError as exc:
        print(f"[workbench:recent] {exc}")
        return 1
    print("[workbench:recent] cleared")
    return 0


def _handle_open(args: argparse.Namespace) -> int:
    app = _build_app(args, dry_run=args.dry_run)
    try:
        targets = tuple(_target_for(args.kind, location) for location in args.locations)
    except ValueError as exc:
        print(f"[workbench:open] {exc}")
        return 1
    request = OpenRequest(
        locations=targets,
        options=OpenOptions(
            force_new_window=args.force_new_window,
            force_reuse_window=args.force_reuse_window,
        ),
    )
    report = asyncio.run(app.router.open(request))
    for failure in report.failures:
        print(f"[workbench:open] failed {failure.target}: {failure.error}")
    if report.history_error is not None:
        print(f"[workbench:open] {report.history_error}")
    return 0 if report.ok and report.history_error is None else 1


def _handle_status(args: argparse.Namespace) -> int:
    app = _build_app(args)
    for key, value in app.status().items():
        print(f"[workbench:status] {key}={value}")
    return 0
