"""Breadcrumbs API endpoint.

Resolves the breadcrumb trail of a single item.
"""

import logging

from aiohttp import web

from crumbtrail.app_keys import loader_key, tiebreaker_key
from crumbtrail.core.breadcrumbs import (
    AmbiguousAncestorError,
    breadcrumbs_trail,
    tiebreaker_for,
)
from crumbtrail.core.identifier import InvalidIdentifierError

logger = logging.getLogger(__name__)


def create_breadcrumbs_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/breadcrumbs/{identifier:.*}", get_breadcrumbs),
    ]


async def get_breadcrumbs(request: web.Request) -> web.Response:
    raw_identifier = request.match_info["identifier"]
    loader = request.app[loader_key]

    tiebreaker = request.app[tiebreaker_key]
    tiebreaker_name = request.query.get("tiebreaker")
    if tiebreaker_name is not None:
        try:
            tiebreaker = tiebreaker_for(tiebreaker_name)
        except ValueError as e:
            return web.json_response({"error": str(e)}, status=400)

    try:
        identifier = loader.parse_identifier(raw_identifier)
    except InvalidIdentifierError as e:
        return web.json_response(
            {"error": str(e), "identifier": raw_identifier},
            status=400,
        )

    try:
        items = loader.load()
    except ValueError as e:
        logger.error(f"Failed to load items: {e}")
        return web.json_response({"error": str(e)}, status=500)

    item = items.lookup(identifier)
    if item is None:
        return web.json_response(
            {"error": "Item not found", "identifier": str(identifier)},
            status=404,
        )

    try:
        trail = breadcrumbs_trail(item, items, tiebreaker)
    except AmbiguousAncestorError as e:
        logger.warning(f"Breadcrumbs for {identifier}: {e}")
        return web.json_response(
            {
                "error": str(e),
                "identifier": str(identifier),
                "pattern": e.pattern,
                "items": [str(candidate.identifier) for candidate in e.items],
            },
            status=409,
        )

    return web.json_response(
        {"identifier": str(identifier), "trail": trail.to_list()},
    )
