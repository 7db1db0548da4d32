"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from crumbtrail.config import (
    BreadcrumbsConfig,
    Config,
    ContentConfig,
    LiveReloadConfig,
    ServerConfig,
)
from crumbtrail.core.identifier import Identifier
from crumbtrail.core.items import Item, ItemIndex


def _make_index(*identifiers: str) -> ItemIndex:
    return ItemIndex(Item(Identifier(identifier)) for identifier in identifiers)


@pytest.fixture
def make_index() -> Callable[..., ItemIndex]:
    """Return a factory building an index of untitled items from identifiers."""
    return _make_index


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create a content directory with a gap below /software."""
    content = tmp_path / "content"
    software = content / "software"
    software.mkdir(parents=True)
    (content / "index.md").write_text("# Home\n\nWelcome.")
    (software / "oink.md").write_text("# Oink\n\nA pig simulator.")

    return content


@pytest.fixture
def test_config(content_dir: Path) -> Config:
    """Create a test configuration pointing at content_dir."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(source_dir=content_dir),
        breadcrumbs=BreadcrumbsConfig(),
        live_reload=LiveReloadConfig(enabled=False),
    )
