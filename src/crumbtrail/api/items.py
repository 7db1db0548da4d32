"""Items API endpoint.

Lists every item of the content index.
"""

import logging

from aiohttp import web

from crumbtrail.app_keys import loader_key

logger = logging.getLogger(__name__)


def create_items_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/items", get_items),
    ]


async def get_items(request: web.Request) -> web.Response:
    loader = request.app[loader_key]
    try:
        items = loader.load()
    except ValueError as e:
        logger.error(f"Failed to load items: {e}")
        return web.json_response({"error": str(e)}, status=500)
    return web.json_response({"items": [item.to_dict() for item in items]})
