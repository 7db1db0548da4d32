"""Identifier patterns.

Glob patterns are matched component by component, so ``*``, ``?`` and
character classes never cross a ``/``. ``**`` spans any number of
components and ``{a,b}`` expands into alternatives. A leading dot in a
component is only matched by a literal dot, never by a wildcard.
"""

import fnmatch
import re
from typing import Protocol

from crumbtrail.core.identifier import Identifier


class Pattern(Protocol):
    """Matcher over identifiers. ``str()`` gives the external representation."""

    def match(self, identifier: Identifier | str) -> bool: ...


class GlobPattern:
    """Pathname-aware glob, e.g. ``/software.*`` or ``/blog/**/*.md``."""

    __slots__ = ("_alternatives", "_glob")

    def __init__(self, glob: str) -> None:
        self._glob = glob
        self._alternatives = [
            alternative.split("/") for alternative in _expand_braces(glob)
        ]

    def match(self, identifier: Identifier | str) -> bool:
        parts = str(identifier).split("/")
        return any(_match_parts(parts, tokens) for tokens in self._alternatives)

    def __str__(self) -> str:
        return self._glob

    def __repr__(self) -> str:
        return f"<GlobPattern {self._glob!r}>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GlobPattern):
            return self._glob == other._glob
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("glob", self._glob))


class RegexpPattern:
    """Regular expression searched anywhere in the identifier."""

    __slots__ = ("_regexp",)

    def __init__(self, regexp: re.Pattern[str]) -> None:
        self._regexp = regexp

    def match(self, identifier: Identifier | str) -> bool:
        return self._regexp.search(str(identifier)) is not None

    def __str__(self) -> str:
        return self._regexp.pattern

    def __repr__(self) -> str:
        return f"<RegexpPattern {self._regexp.pattern!r}>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RegexpPattern):
            return self._regexp == other._regexp
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("regexp", self._regexp))


def pattern_from(obj: "Pattern | str | re.Pattern[str]") -> Pattern:
    """Build a pattern from a glob string, a compiled regex, or a pattern."""
    if isinstance(obj, str):
        return GlobPattern(obj)
    if isinstance(obj, re.Pattern):
        return RegexpPattern(obj)
    if callable(getattr(obj, "match", None)):
        return obj
    raise TypeError(f"do not know how to convert {type(obj).__name__} into a pattern")


def has_glob_chars(string: str) -> bool:
    """Check whether a string would be interpreted as a glob."""
    return any(char in string for char in "*?[{")


def _match_parts(parts: list[str], tokens: list[str]) -> bool:
    def rec(i: int, j: int) -> bool:
        if j == len(tokens):
            return i == len(parts)

        token = tokens[j]
        if token == "**":
            return rec(i, j + 1) or (
                i < len(parts) and not _is_hidden(parts[i]) and rec(i + 1, j)
            )

        return (
            i < len(parts)
            and _match_component(parts[i], token)
            and rec(i + 1, j + 1)
        )

    return rec(0, 0)


def _match_component(part: str, token: str) -> bool:
    if _is_hidden(part) and not token.startswith("."):
        return False
    return fnmatch.fnmatchcase(part, token)


def _is_hidden(part: str) -> bool:
    return part.startswith(".")


def _expand_braces(glob: str) -> list[str]:
    """Expand the first top-level ``{a,b}`` group, recursively."""
    start = glob.find("{")
    if start == -1:
        return [glob]

    depth = 0
    options: list[str] = []
    option_start = start + 1
    for pos in range(start, len(glob)):
        char = glob[pos]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                options.append(glob[option_start:pos])
                head, tail = glob[:start], glob[pos + 1 :]
                return [
                    expanded
                    for option in options
                    for expanded in _expand_braces(head + option + tail)
                ]
        elif char == "," and depth == 1:
            options.append(glob[option_start:pos])
            option_start = pos + 1

    # Unbalanced brace: treat literally
    return [glob]
