"""Resource locators and their normalized string form."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit

_PATH_SAFE = "/:@!$&'()*+,;="


@dataclass(frozen=True)
class Resource:
    """Immutable ``scheme://authority/path`` locator.

    Query strings and fragments are not part of a resource; two resources are
    the same location exactly when their normalized strings are equal. The
    comparison is case-sensitive and does not consult the filesystem.
    """

    scheme: str
    authority: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        scheme = (self.scheme or "").strip().lower()
        if not scheme:
            raise ValueError("scheme cannot be empty.")
        object.__setattr__(self, "scheme", scheme)
        if self.path and not self.path.startswith("/"):
            object.__setattr__(self, "path", "/" + self.path)
        try:
            self.authority.encode("utf-8")
            self.path.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"resource location is not valid text: {exc.reason}") from exc

    @classmethod
    def parse(cls, value: str) -> "Resource":
        text = str(value).strip()
        if not text:
            raise ValueError("resource location cannot be empty.")
        parts = urlsplit(text)
        if not parts.scheme:
            raise ValueError(f"{value!r} has no scheme; use Resource.file() for paths.")
        return cls(scheme=parts.scheme, authority=parts.netloc, path=unquote(parts.path))

    @classmethod
    def file(cls, path: str | Path) -> "Resource":
        resolved = Path(path).expanduser().resolve().as_posix()
        return cls(scheme="file", path=resolved)

    def to_string(self) -> str:
        return f"{self.scheme}://{self.authority}{quote(self.path, safe=_PATH_SAFE)}"

    def __str__(self) -> str:
        return self.to_string()


def as_resource(value: "Resource | str | Path") -> Resource:
    """Coerce user input into a ``Resource``.

    Strings with a scheme are parsed as URIs; anything else is treated as a
    local filesystem path.
    """

    if isinstance(value, Resource):
        return value
    if isinstance(value, Path):
        return Resource.file(value)
    if isinstance(value, str):
        if "://" in value:
            return Resource.parse(value)
        return Resource.file(value)
    raise TypeError(f"cannot build a resource from {type(value).__name__}.")
