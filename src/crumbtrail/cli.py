"""CLI interface for crumbtrail.

Command-line tool for inspecting breadcrumb trails of a content directory.
"""

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from crumbtrail.config import Config
from crumbtrail.core.breadcrumbs import (
    TIEBREAKERS,
    AmbiguousAncestorError,
    BreadcrumbTrail,
    breadcrumbs_trail,
    tiebreaker_for,
)
from crumbtrail.core.loader import ItemLoader

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover crumbtrail.toml)",
)
source_dir_option = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content source directory (overrides config)",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)


@click.group()
def cli() -> None:
    """crumbtrail - Breadcrumb trails for hierarchical content."""


@cli.command()
@click.argument("identifier")
@config_option
@source_dir_option
@click.option(
    "--tiebreaker",
    type=click.Choice(sorted(TIEBREAKERS)),
    default=None,
    help="Policy for ambiguous ancestors (overrides config, default: error)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the trail as JSON")
@verbose_option
def trail(
    identifier: str,
    config_path: Path | None,
    source_dir: Path | None,
    tiebreaker: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Print the breadcrumb trail of IDENTIFIER (e.g. /software/oink.md)."""
    _configure_logging(verbose)
    config = _load_config(config_path, source_dir=source_dir, tiebreaker=tiebreaker)
    loader = _create_loader(config)

    try:
        items = loader.load()
        subject = items.lookup(loader.parse_identifier(identifier))
    except ValueError as e:
        _fail(str(e))
    if subject is None:
        _fail(f"item not found: {identifier}")

    try:
        result = breadcrumbs_trail(
            subject,
            items,
            tiebreaker_for(config.breadcrumbs.tiebreaker),
        )
    except AmbiguousAncestorError as e:
        for candidate in e.items:
            click.echo(f"  - {candidate.identifier}", err=True)
        _fail(str(e))

    if as_json:
        click.echo(json.dumps({"identifier": str(subject.identifier), "trail": result.to_list()}))
    else:
        _print_trail(result)


@cli.command()
@config_option
@source_dir_option
@verbose_option
def items(config_path: Path | None, source_dir: Path | None, verbose: bool) -> None:
    """List every item identifier in the content directory."""
    _configure_logging(verbose)
    config = _load_config(config_path, source_dir=source_dir)

    try:
        index = _create_loader(config).load()
    except ValueError as e:
        _fail(str(e))

    for item in index:
        click.echo(str(item.identifier))


@cli.command()
@config_option
@source_dir_option
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@verbose_option
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
    verbose: bool,
) -> None:
    """Start the breadcrumbs API server."""
    from crumbtrail.server import run_server

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        source_dir=source_dir,
        host=host,
        port=port,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content directory: {config.content.source_dir}")
    click.echo(f"Identifier type: {config.content.identifier_type}")
    click.echo(f"Tiebreaker: {config.breadcrumbs.tiebreaker}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None, **overrides: object) -> Config:
    """Load configuration and apply CLI overrides, exiting on errors."""
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(**overrides)  # type: ignore[arg-type]


def _create_loader(config: Config) -> ItemLoader:
    return ItemLoader(
        config.content.source_dir,
        identifier_type=config.content.identifier_type,
    )


def _print_trail(result: BreadcrumbTrail) -> None:
    for entry in result:
        if entry is None:
            click.echo(click.style("(none)", dim=True))
        elif entry.title:
            click.echo(f"{entry.identifier}  {entry.title}")
        else:
            click.echo(str(entry.identifier))


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
