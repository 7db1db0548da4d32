"""Breadcrumb trails for content items.

Parent lookups cannot be used directly because a trail can have gaps: the
trail for ``/software/oink.md`` is ``/index.md -> None -> /software/oink.md``
when no item matches ``/software.*``. Instead:

1. The identifier is split into an ordered prefix list, e.g.
   ``["", "/software", "/software/oink.md"]``.
2. Every ancestor prefix is turned into patterns, most specific first
   (``/software.*``).
3. The first pattern that matches anything in the item index wins.
4. The last entry is always the subject item itself: ancestors may be
   ambiguous, the subject never is.
"""

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from itertools import accumulate
from typing import Protocol, TypeVar

from crumbtrail.core.identifier import Identifier
from crumbtrail.core.items import Item, ItemIndex

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROOT_INDEX_PATTERN = "/index.*"

# Prefixes like /index.md stand for the root index, not for an ancestor
_INDEX_PREFIX = re.compile(r"^/index\.")


class AmbiguousAncestorError(Exception):
    """Raised when more than one item matches an ancestor pattern."""

    def __init__(self, pattern: str, items: list[Item]) -> None:
        self.pattern = pattern
        self.items = list(items)
        super().__init__(
            f"expected only one item to match {pattern}, but found {len(self.items)}",
        )


class Tiebreaker(Protocol):
    """Policy picking one item when an ancestor pattern is ambiguous."""

    def resolve(self, pattern: str, items: list[Item]) -> Item: ...


class ErrorTiebreaker:
    """Refuse to guess: raise AmbiguousAncestorError."""

    def resolve(self, pattern: str, items: list[Item]) -> Item:
        raise AmbiguousAncestorError(pattern, items)


class FirstTiebreaker:
    """Pick the first matching item in index order."""

    def resolve(self, pattern: str, items: list[Item]) -> Item:
        return items[0]


DEFAULT_TIEBREAKER: Tiebreaker = ErrorTiebreaker()

TIEBREAKERS: dict[str, Callable[[], Tiebreaker]] = {
    "error": ErrorTiebreaker,
    "first": FirstTiebreaker,
}


def tiebreaker_for(name: str) -> Tiebreaker:
    """Create a tiebreaker from its configuration name.

    Args:
        name: One of the TIEBREAKERS keys

    Returns:
        Tiebreaker instance

    Raises:
        ValueError: If the name is unknown
    """
    factory = TIEBREAKERS.get(name)
    if factory is None:
        known = ", ".join(sorted(TIEBREAKERS))
        raise ValueError(f"unknown tiebreaker {name!r} (expected one of: {known})")
    return factory()


@dataclass(frozen=True)
class BreadcrumbTrail:
    """Ancestors of an item, root first, ending with the item itself.

    Entries are None where no ancestor item exists.
    """

    items: tuple[Item | None, ...]

    @property
    def subject(self) -> Item | None:
        return self.items[-1] if self.items else None

    @property
    def ancestors(self) -> tuple[Item | None, ...]:
        return self.items[:-1]

    def to_list(self) -> list[dict[str, str | None] | None]:
        """Convert to list for JSON serialization."""
        return [item.to_dict() if item is not None else None for item in self.items]

    def __iter__(self) -> Iterator[Item | None]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Item | None:
        return self.items[index]


def unfold(value: T, step: Callable[[T], T | None]) -> Iterator[T]:
    """Yield value, then step(value), and so on until step returns None.

    >>> list(unfold(10, lambda n: n // 2 or None))
    [10, 5, 2, 1]
    """
    current: T | None = value
    while current is not None:
        yield current
        current = step(current)


def prefixes_of(identifier: Identifier) -> list[str]:
    """Build the ordered prefix list of an identifier.

    >>> prefixes_of(Identifier("/foo/bar.md"))
    ['', '/foo', '/foo/bar.md']
    """
    return list(
        accumulate(
            identifier.components,
            lambda prefix, component: f"{prefix}/{component}",
            initial="",
        )
    )


def patterns_for_prefix(prefix: str) -> Iterator[str]:
    """Yield glob patterns for a prefix, most specific first.

    Patterns are generated lazily, so callers that stop at the first match
    never build the broader ones.

    >>> list(patterns_for_prefix("/foo/1.0"))
    ['/foo/1.0.*', '/foo/1.*']
    """
    for candidate in unfold(prefix, _strip_ext):
        yield candidate + ".*"


def find_one(items: ItemIndex, pattern: str, tiebreaker: Tiebreaker) -> Item | None:
    """Find the single item matching a pattern.

    Returns None when nothing matches and defers to the tiebreaker when
    more than one item does.
    """
    matches = items.find_all(pattern)
    if not matches:
        return None
    if len(matches) == 1:
        return matches[0]

    logger.debug(f"{len(matches)} items match {pattern}, using {type(tiebreaker).__name__}")
    return tiebreaker.resolve(pattern, matches)


def breadcrumbs_trail(
    item: Item,
    items: ItemIndex,
    tiebreaker: Tiebreaker = DEFAULT_TIEBREAKER,
) -> BreadcrumbTrail:
    """Build the breadcrumb trail for an item.

    Args:
        item: Item to build the trail for
        items: Index used to find ancestor items
        tiebreaker: Policy for ancestor patterns that match several items

    Returns:
        Trail from the root to the item

    Raises:
        AmbiguousAncestorError: If the default tiebreaker meets an ambiguous
            ancestor. Ancestors are resolved root first, so the error refers
            to the topmost ambiguous one.
    """
    identifier = item.identifier
    prefixes = prefixes_of(identifier)

    if identifier.is_legacy:
        return BreadcrumbTrail(
            tuple(
                items.lookup(Identifier("/" + prefix, type="legacy"))
                for prefix in prefixes
            )
        )

    ancestral_prefixes = [p for p in prefixes if not _INDEX_PREFIX.match(p)][:-1]
    ancestors = [
        _find_ancestor(items, prefix, tiebreaker) for prefix in ancestral_prefixes
    ]
    return BreadcrumbTrail((*ancestors, item))


def _find_ancestor(items: ItemIndex, prefix: str, tiebreaker: Tiebreaker) -> Item | None:
    if prefix == "":
        return items.lookup(ROOT_INDEX_PATTERN)

    for pattern in patterns_for_prefix(prefix):
        found = find_one(items, pattern, tiebreaker)
        if found is not None:
            return found
    return None


def _strip_ext(prefix: str) -> str | None:
    stripped = str(Identifier(prefix).without_ext())
    return None if stripped == prefix else stripped
