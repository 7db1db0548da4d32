"""Application keys for type-safe app configuration access."""

from aiohttp import web

from crumbtrail.core.breadcrumbs import Tiebreaker
from crumbtrail.core.loader import ItemLoader
from crumbtrail.live.reload import LiveReloadManager

loader_key = web.AppKey("loader", ItemLoader)
tiebreaker_key = web.AppKey("tiebreaker", Tiebreaker)
live_reload_key = web.AppKey("live_reload_manager", LiveReloadManager)
