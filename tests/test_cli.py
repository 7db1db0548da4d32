"""Tests for CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from crumbtrail.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestTrailCommand:
    """Tests for the trail command."""

    def test__gap__prints_none_entry(self, runner: CliRunner, content_dir: Path) -> None:
        """Print every trail entry, marking gaps."""
        result = runner.invoke(
            cli, ["trail", "/software/oink.md", "-s", str(content_dir)]
        )

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "/index.md  Home",
            "(none)",
            "/software/oink.md  Oink",
        ]

    def test__relative_identifier__accepted(
        self, runner: CliRunner, content_dir: Path
    ) -> None:
        result = runner.invoke(cli, ["trail", "software/oink.md", "-s", str(content_dir)])

        assert result.exit_code == 0
        assert "/software/oink.md  Oink" in result.output

    def test__json__prints_trail(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(
            cli, ["trail", "/software/oink.md", "-s", str(content_dir), "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {
            "identifier": "/software/oink.md",
            "trail": [
                {"identifier": "/index.md", "title": "Home"},
                None,
                {"identifier": "/software/oink.md", "title": "Oink"},
            ],
        }

    def test__unknown_item__fails(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(cli, ["trail", "/missing.md", "-s", str(content_dir)])

        assert result.exit_code == 1
        assert "item not found: /missing.md" in result.output

    def test__invalid_identifier__fails(
        self, runner: CliRunner, content_dir: Path
    ) -> None:
        result = runner.invoke(cli, ["trail", "/software/", "-s", str(content_dir)])

        assert result.exit_code == 1
        assert "ends with a slash" in result.output

    def test__ambiguous_ancestor__fails(
        self, runner: CliRunner, content_dir: Path
    ) -> None:
        (content_dir / "software.md").write_text("# Software")
        (content_dir / "software.html").write_text("<h1>Software</h1>")

        result = runner.invoke(
            cli, ["trail", "/software/oink.md", "-s", str(content_dir)]
        )

        assert result.exit_code == 1
        assert (
            "expected only one item to match /software.*, but found 2" in result.output
        )
        assert "/software.html" in result.output

    def test__first_tiebreaker__recovers(
        self, runner: CliRunner, content_dir: Path
    ) -> None:
        (content_dir / "software.md").write_text("# Software")
        (content_dir / "software.html").write_text("<h1>Software</h1>")

        result = runner.invoke(
            cli,
            [
                "trail",
                "/software/oink.md",
                "-s",
                str(content_dir),
                "--tiebreaker",
                "first",
            ],
        )

        assert result.exit_code == 0
        assert result.output.splitlines()[1] == "/software.html  Software"

    def test__config_file__sets_tiebreaker(
        self, runner: CliRunner, tmp_path: Path, content_dir: Path
    ) -> None:
        (content_dir / "software.md").write_text("# Software")
        (content_dir / "software.txt").write_text("Software")
        config_file = tmp_path / "crumbtrail.toml"
        config_file.write_text('[breadcrumbs]\ntiebreaker = "first"')

        result = runner.invoke(
            cli, ["trail", "/software/oink.md", "-c", str(config_file)]
        )

        assert result.exit_code == 0
        assert "/software.md  Software" in result.output

    def test__legacy_config__uses_exact_lookups(
        self, runner: CliRunner, tmp_path: Path, content_dir: Path
    ) -> None:
        config_file = tmp_path / "crumbtrail.toml"
        config_file.write_text('[content]\nidentifier_type = "legacy"')

        result = runner.invoke(cli, ["trail", "software/oink", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["/  Home", "(none)", "/software/oink/  Oink"]

    def test__invalid_config__fails(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "crumbtrail.toml"
        config_file.write_text('[breadcrumbs]\ntiebreaker = "random"')

        result = runner.invoke(cli, ["trail", "/a.md", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "breadcrumbs.tiebreaker must be one of" in result.output


class TestItemsCommand:
    """Tests for the items command."""

    def test__lists_identifiers(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(cli, ["items", "-s", str(content_dir)])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["/index.md", "/software/oink.md"]

    def test__missing_config__fails(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["items", "--config", str(tmp_path / "nonexistent.toml")]
        )

        assert result.exit_code != 0


class TestServeCommand:
    """Tests for the serve command."""

    def test__runs_server_with_overrides(
        self, runner: CliRunner, content_dir: Path
    ) -> None:
        with patch("crumbtrail.server.run_server") as run_server:
            result = runner.invoke(
                cli,
                [
                    "serve",
                    "-s",
                    str(content_dir),
                    "--port",
                    "9000",
                    "--no-live-reload",
                ],
            )

        assert result.exit_code == 0
        assert "Starting server on 127.0.0.1:9000" in result.output
        assert "Live reload: disabled" in result.output
        config = run_server.call_args.args[0]
        assert config.content.source_dir == content_dir
        assert config.live_reload.enabled is False
