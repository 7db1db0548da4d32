"""Item index loading from a content directory.

Every file below the source directory becomes one item. Files and
directories starting with ``.`` or ``_`` are skipped.
"""

import logging
import re
from pathlib import Path, PurePosixPath

from crumbtrail.core.identifier import Identifier, IdentifierType
from crumbtrail.core.items import Item, ItemIndex

logger = logging.getLogger(__name__)

_H1_PATTERN = re.compile(r"^#[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$", re.MULTILINE)


class ItemLoader:
    """Builds and caches an ItemIndex from a content directory.

    Identifiers follow the configured addressing mode:

    - full: ``software/oink.md`` -> ``/software/oink.md``
    - legacy: ``software/oink.md`` -> ``/software/oink/`` and
      ``software/index.md`` -> ``/software/``
    """

    def __init__(
        self,
        source_dir: Path,
        identifier_type: IdentifierType = "full",
    ) -> None:
        """Initialize loader.

        Args:
            source_dir: Root directory containing content files
            identifier_type: Addressing mode for item identifiers
        """
        self._source_dir = source_dir
        self._identifier_type: IdentifierType = identifier_type
        self._index: ItemIndex | None = None

    @property
    def source_dir(self) -> Path:
        """Root content directory."""
        return self._source_dir

    @property
    def identifier_type(self) -> IdentifierType:
        return self._identifier_type

    def load(self, *, use_cache: bool = True) -> ItemIndex:
        """Load the item index.

        Args:
            use_cache: Reuse the index built by a previous call

        Returns:
            ItemIndex with one item per content file

        Raises:
            ValueError: If two files map to the same identifier
        """
        if use_cache and self._index is not None:
            return self._index

        index = ItemIndex(self._scan())
        logger.info(f"Loaded {len(index)} items from {self._source_dir}")
        self._index = index
        return index

    def invalidate(self) -> None:
        """Drop the cached index so the next load rescans the directory."""
        self._index = None

    def identifier_for(self, relative: PurePosixPath) -> Identifier:
        """Convert a path relative to the source directory into an identifier.

        Args:
            relative: Relative file path (e.g., "software/oink.md")

        Returns:
            Identifier in the configured addressing mode
        """
        if self._identifier_type == "full":
            return Identifier(f"/{relative}")

        stem = relative.with_suffix("")
        if stem.name == "index":
            stem = stem.parent
        path = "" if str(stem) == "." else str(stem)
        return Identifier(path, type="legacy")

    def parse_identifier(self, string: str) -> Identifier:
        """Parse user input (e.g., "software/oink.md") into an identifier.

        Raises:
            InvalidIdentifierError: If the string is not a valid full identifier
        """
        if self._identifier_type == "legacy":
            return Identifier(string, type="legacy")
        return Identifier(string if string.startswith("/") else f"/{string}")

    def _scan(self) -> list[Item]:
        if not self._source_dir.is_dir():
            logger.warning(f"Content directory not found: {self._source_dir}")
            return []

        items: list[Item] = []
        for path in sorted(self._source_dir.rglob("*")):
            relative = path.relative_to(self._source_dir)
            if any(part.startswith((".", "_")) for part in relative.parts):
                logger.debug(f"Skipping {relative}")
                continue
            if not path.is_file():
                continue

            items.append(
                Item(
                    identifier=self.identifier_for(PurePosixPath(relative.as_posix())),
                    title=self._extract_title(path, relative),
                    source_path=relative,
                )
            )
        return items

    def _extract_title(self, path: Path, relative: Path) -> str:
        """Extract title from the first H1, falling back to the file name."""
        if path.suffix == ".md":
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read {relative}: {e}")
            else:
                match = _H1_PATTERN.search(content)
                if match:
                    return match.group(1)

        name = path.stem
        if name == "index" and relative.parent != Path("."):
            name = relative.parent.name
        return name.replace("-", " ").replace("_", " ").title()
