"""aiohttp server for crumbtrail.

Application factory and route registration for the JSON API.
"""

from aiohttp import web

from crumbtrail.api.breadcrumbs import create_breadcrumbs_routes
from crumbtrail.api.items import create_items_routes
from crumbtrail.app_keys import live_reload_key, loader_key, tiebreaker_key
from crumbtrail.config import Config
from crumbtrail.core.breadcrumbs import tiebreaker_for
from crumbtrail.core.loader import ItemLoader
from crumbtrail.live.reload import LiveReloadManager, create_live_reload_routes


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        ValueError: If the configured tiebreaker is unknown
    """
    app = web.Application()

    loader = ItemLoader(
        config.content.source_dir,
        identifier_type=config.content.identifier_type,
    )

    app[loader_key] = loader
    app[tiebreaker_key] = tiebreaker_for(config.breadcrumbs.tiebreaker)

    app.router.add_routes(create_items_routes())
    app.router.add_routes(create_breadcrumbs_routes())

    # Live reload WebSocket endpoint
    if config.live_reload.enabled:
        manager = LiveReloadManager(
            config.content.source_dir,
            watch_patterns=config.live_reload.watch_patterns,
            loader=loader,
        )
        app[live_reload_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
