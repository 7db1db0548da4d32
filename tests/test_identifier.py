"""Tests for Identifier."""

import pytest
from crumbtrail.core.identifier import (
    Identifier,
    InvalidFullIdentifierError,
    InvalidIdentifierError,
    UnsupportedLegacyOperationError,
)


class TestIdentifierCreation:
    """Tests for Identifier construction."""

    def test__full__keeps_string(self) -> None:
        """Keep full identifiers verbatim."""
        identifier = Identifier("/software/oink.md")

        assert str(identifier) == "/software/oink.md"
        assert identifier.is_full
        assert not identifier.is_legacy

    def test__full__missing_leading_slash__raises(self) -> None:
        """Reject full identifiers without a leading slash."""
        with pytest.raises(InvalidIdentifierError, match="does not start with a slash"):
            Identifier("software/oink.md")

    def test__full__trailing_slash__raises(self) -> None:
        """Reject full identifiers with a trailing slash."""
        with pytest.raises(InvalidFullIdentifierError, match="ends with a slash"):
            Identifier("/software/")

    def test__legacy__wraps_in_slashes(self) -> None:
        """Wrap legacy identifiers in single slashes."""
        identifier = Identifier("software/oink", type="legacy")

        assert str(identifier) == "/software/oink/"
        assert identifier.is_legacy

    def test__legacy__collapses_edge_slashes(self) -> None:
        """Collapse repeated leading and trailing slashes."""
        assert str(Identifier("//software", type="legacy")) == "/software/"
        assert str(Identifier("", type="legacy")) == "/"

    def test__unknown_type__raises(self) -> None:
        """Reject unknown addressing modes."""
        with pytest.raises(ValueError, match="unknown identifier type"):
            Identifier("/foo", type="weird")  # type: ignore[arg-type]

    def test__from_value__string__creates_full(self) -> None:
        """Coerce strings into full identifiers."""
        identifier = Identifier.from_value("/about.md")

        assert identifier == Identifier("/about.md")
        assert identifier.is_full

    def test__from_value__identifier__returns_same(self) -> None:
        """Pass identifiers through unchanged."""
        identifier = Identifier("/about.md")

        assert Identifier.from_value(identifier) is identifier

    def test__from_value__other__raises(self) -> None:
        """Reject values that are neither strings nor identifiers."""
        with pytest.raises(TypeError):
            Identifier.from_value(42)  # type: ignore[arg-type]


class TestIdentifierComponents:
    """Tests for Identifier.components."""

    def test__full__returns_components(self) -> None:
        assert Identifier("/software/oink.md").components == ["software", "oink.md"]

    def test__legacy__ignores_trailing_slash(self) -> None:
        identifier = Identifier("/software/oink/", type="legacy")

        assert identifier.components == ["software", "oink"]

    def test__legacy_root__returns_empty(self) -> None:
        assert Identifier("/", type="legacy").components == []


class TestIdentifierExtensions:
    """Tests for extension handling."""

    def test__without_ext__strips_last_extension(self) -> None:
        """Strip only the last extension."""
        assert Identifier("/foo/1.0").without_ext() == "/foo/1"
        assert Identifier("/index.html.erb").without_ext() == "/index.html"

    def test__without_ext__no_extension__returns_equal(self) -> None:
        """Stripping is idempotent once no extension is left."""
        identifier = Identifier("/foo/1")

        assert identifier.without_ext() == identifier

    def test__without_ext__directory_dot__ignored(self) -> None:
        """Dots in parent components are not extensions."""
        identifier = Identifier("/v1.0/readme")

        assert identifier.without_ext() == identifier

    def test__without_ext__dotfile__ignored(self) -> None:
        """A leading dot does not start an extension."""
        identifier = Identifier("/.htaccess")

        assert identifier.without_ext() == identifier

    def test__ext__returns_last_extension(self) -> None:
        assert Identifier("/index.html.erb").ext == "erb"
        assert Identifier("/readme").ext is None

    def test__exts__returns_all_extensions(self) -> None:
        assert Identifier("/index.html.erb").exts == ["html", "erb"]
        assert Identifier("/readme").exts == []

    def test__without_exts__strips_all_extensions(self) -> None:
        assert Identifier("/blog/index.html.erb").without_exts() == "/blog/index"

    def test__without_exts__dotfile__unchanged(self) -> None:
        assert Identifier("/.htaccess").without_exts() == "/.htaccess"

    def test__legacy__without_ext__raises(self) -> None:
        """Extension operations are not defined for legacy identifiers."""
        identifier = Identifier("/foo/", type="legacy")

        with pytest.raises(UnsupportedLegacyOperationError):
            identifier.without_ext()


class TestIdentifierValueSemantics:
    """Tests for equality, hashing, ordering and concatenation."""

    def test__equal_to_string(self) -> None:
        assert Identifier("/a.md") == "/a.md"
        assert Identifier("/a.md") != "/b.md"

    def test__hashable(self) -> None:
        assert {Identifier("/a.md"), Identifier("/a.md")} == {Identifier("/a.md")}

    def test__orderable(self) -> None:
        identifiers = [Identifier("/b.md"), Identifier("/a.md")]

        assert sorted(identifiers) == [Identifier("/a.md"), Identifier("/b.md")]

    def test__add__appends_string(self) -> None:
        assert Identifier("/foo") + ".*" == "/foo.*"

    def test__prefix__prepends_path(self) -> None:
        assert Identifier("/foo.md").prefix("/blog/") == "/blog/foo.md"
