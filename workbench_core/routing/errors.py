"""Typed window routing errors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .types import DispatchFailure


class RoutingError(RuntimeError):
    """Base routing error."""


class WindowOpenError(RoutingError):
    """One or more targets of an open request could not be dispatched."""

    def __init__(self, failures: Sequence["DispatchFailure"]) -> None:
        self.failures = tuple(failures)
        details = "; ".join(
            f"{_describe(failure.target)}: {failure.error}" for failure in self.failures
        )
        super().__init__(f"{len(self.failures)} target(s) failed to open: {details}")


def _describe(target: object) -> str:
    for attribute in ("folder_uri", "workspace_uri", "file_uri"):
        location = getattr(target, attribute, None)
        if location is not None:
            return str(location)
    return repr(target)
