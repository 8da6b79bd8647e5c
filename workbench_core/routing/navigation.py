"""Navigation primitives that point a session at a folder or workspace."""

from __future__ import annotations

import logging
import webbrowser
from typing import Protocol
from urllib.parse import quote

from ..uri import Resource
from .types import NavigationKind

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    def navigate(self, address: str, *, new_window: bool) -> None:
        ...


def navigation_address(origin: str, kind: NavigationKind, target: Resource) -> str:
    """Build ``{origin}/?folder=<path>`` or ``{origin}/?workspace=<path>``."""

    return f"{origin.rstrip('/')}/?{NavigationKind(kind).value}={quote(target.path, safe='/')}"


class BrowserNavigator:
    """Open addresses through the platform browser."""

    def __init__(self, controller: webbrowser.BaseBrowser | None = None) -> None:
        self._controller = controller

    def navigate(self, address: str, *, new_window: bool) -> None:
        browser = self._controller or webbrowser.get()
        if new_window:
            opened = browser.open_new(address)
        else:
            opened = browser.open(address, new=0)
        if not opened:
            raise RuntimeError(f"browser refused to open {address}")
        logger.debug("navigated %s window to %s", "new" if new_window else "current", address)
