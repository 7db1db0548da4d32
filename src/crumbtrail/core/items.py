"""Content items and the item index.

The index is the lookup collaborator of breadcrumb resolution: it finds
items by pattern and by exact identifier. Items are kept in insertion
order, which is the order callers see from ``find_all``.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from crumbtrail.core.identifier import Identifier
from crumbtrail.core.pattern import Pattern, has_glob_chars, pattern_from


@dataclass(frozen=True)
class Item:
    """Content item."""

    identifier: Identifier
    title: str | None = None
    source_path: Path | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON serialization."""
        return {"identifier": str(self.identifier), "title": self.title}


class ItemIndex:
    """Collection of items with exact and pattern lookups.

    Exact lookups are O(1) through an identifier index; pattern lookups
    scan all items.
    """

    __slots__ = ("_by_identifier", "_items")

    def __init__(self, items: Iterable[Item] = ()) -> None:
        """Initialize the index.

        Args:
            items: Items in lookup order

        Raises:
            ValueError: If two items share an identifier
        """
        self._items: list[Item] = []
        self._by_identifier: dict[str, Item] = {}
        for item in items:
            key = str(item.identifier)
            if key in self._by_identifier:
                raise ValueError(f"duplicate item identifier: {key}")
            self._by_identifier[key] = item
            self._items.append(item)

    def find_all(self, pattern: Pattern | str | re.Pattern[str]) -> list[Item]:
        """Return every item whose identifier matches the pattern.

        Args:
            pattern: Glob string, compiled regex, or Pattern

        Returns:
            Matching items in index order
        """
        matcher = pattern_from(pattern)
        return [item for item in self._items if matcher.match(item.identifier)]

    def lookup(self, identifier: Identifier | str) -> Item | None:
        """Look up an item by identifier.

        Identifiers are matched verbatim. A string that is not an exact
        identifier but contains glob characters returns the first item
        matching it as a glob.

        Args:
            identifier: Identifier or string (e.g., "/about.md" or "/index.*")

        Returns:
            Item if found, None otherwise
        """
        item = self._by_identifier.get(str(identifier))
        if item is not None or isinstance(identifier, Identifier):
            return item

        if not has_glob_chars(identifier):
            return None

        matcher = pattern_from(identifier)
        return next(
            (item for item in self._items if matcher.match(item.identifier)),
            None,
        )

    def __getitem__(self, identifier: Identifier | str) -> Item | None:
        return self.lookup(identifier)

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._by_identifier

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
