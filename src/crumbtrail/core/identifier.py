"""Content item identifiers.

Identifiers are slash-delimited paths such as ``/software/oink.md``. Two
addressing modes exist:

- full: the path as it appears in the content directory, extension included
- legacy: extension-less and wrapped in slashes (``/software/oink/``)
"""

import posixpath
import re
from functools import total_ordering
from typing import Literal

IdentifierType = Literal["full", "legacy"]

_EDGE_SLASHES = re.compile(r"^/+|/+$")


class InvalidIdentifierError(ValueError):
    """Raised when a full identifier does not start with a slash."""

    reason = "does not start with a slash"

    def __init__(self, string: str) -> None:
        super().__init__(f"invalid identifier ({self.reason}): {string!r}")
        self.string = string


class InvalidFullIdentifierError(InvalidIdentifierError):
    """Raised when a full identifier ends with a slash."""

    reason = "ends with a slash"


class UnsupportedLegacyOperationError(Exception):
    """Raised for extension operations on legacy identifiers."""

    def __init__(self) -> None:
        super().__init__("this operation is not supported on legacy identifiers")


@total_ordering
class Identifier:
    """Structured path of a content item."""

    __slots__ = ("_string", "_type")

    def __init__(self, string: str, type: IdentifierType = "full") -> None:
        if type == "legacy":
            self._string = _EDGE_SLASHES.sub("/", f"/{string}/")
        elif type == "full":
            if not string.startswith("/"):
                raise InvalidIdentifierError(string)
            if string.endswith("/"):
                raise InvalidFullIdentifierError(string)
            self._string = string
        else:
            raise ValueError(f"unknown identifier type: {type!r}")
        self._type: IdentifierType = type

    @classmethod
    def from_value(cls, value: "Identifier | str") -> "Identifier":
        """Coerce a string into a full identifier; identifiers pass through."""
        if isinstance(value, Identifier):
            return value
        if isinstance(value, str):
            return cls(value)
        raise TypeError(f"cannot convert {type(value).__name__} into an identifier")

    @property
    def type(self) -> IdentifierType:
        return self._type

    @property
    def is_legacy(self) -> bool:
        return self._type == "legacy"

    @property
    def is_full(self) -> bool:
        return self._type == "full"

    @property
    def components(self) -> list[str]:
        """Path components, e.g. ``["software", "oink.md"]``."""
        return [part for part in self._string.split("/") if part]

    @property
    def ext(self) -> str | None:
        """Last extension without the dot, or None."""
        self._require_full()
        ext = posixpath.splitext(self._string)[1]
        return ext[1:] if ext else None

    @property
    def exts(self) -> list[str]:
        """All extensions of the basename, e.g. ``["html", "erb"]``."""
        self._require_full()
        basename = posixpath.basename(self._string)
        return basename.split(".")[1:]

    def without_ext(self) -> "Identifier":
        """Strip the last extension.

        Returns an equal identifier when there is no extension, so repeated
        application reaches a fixed point.
        """
        self._require_full()
        root, ext = posixpath.splitext(self._string)
        if not ext:
            return self
        return Identifier(root)

    def without_exts(self) -> "Identifier":
        """Strip every extension of the basename."""
        self._require_full()
        head, basename = posixpath.split(self._string)
        stem = basename.split(".", 1)[0]
        if not stem or stem == basename:
            return self
        return Identifier(posixpath.join(head, stem))

    def prefix(self, string: str) -> "Identifier":
        """Prepend a path, e.g. ``/foo.md`` prefixed with ``/blog`` is ``/blog/foo.md``."""
        if not string.startswith("/"):
            raise InvalidIdentifierError(string)
        return Identifier(string.rstrip("/") + self._string, type=self._type)

    def __add__(self, other: str) -> str:
        return self._string + other

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"<Identifier type={self._type} {self._string!r}>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Identifier):
            return self._string == other._string
        if isinstance(other, str):
            return self._string == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Identifier):
            return self._string < other._string
        if isinstance(other, str):
            return self._string < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._string)

    def _require_full(self) -> None:
        if self.is_legacy:
            raise UnsupportedLegacyOperationError()
