"""WebSocket-based live reload for development mode.

Monitors the content directory, drops the cached item index on every
change and notifies connected clients so they can refetch breadcrumbs.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path
from typing import TYPE_CHECKING

from aiohttp import WSMsgType, web
from watchfiles import awatch

from crumbtrail.core.pattern import GlobPattern

if TYPE_CHECKING:
    from crumbtrail.core.loader import ItemLoader

logger = logging.getLogger(__name__)

DEFAULT_WATCH_PATTERNS = ["**/*"]


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients.
    Every matching change invalidates the loader, since additions and
    deletions both change which ancestors a trail resolves to.
    """

    def __init__(
        self,
        source_dir: Path,
        watch_patterns: list[str] | None = None,
        *,
        loader: "ItemLoader | None" = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            source_dir: Directory to watch for changes
            watch_patterns: Glob patterns relative to source_dir (default: ["**/*"])
            loader: ItemLoader whose cached index is invalidated on changes
        """
        self._source_dir = source_dir
        self._watch_patterns = [
            GlobPattern(pattern) for pattern in watch_patterns or DEFAULT_WATCH_PATTERNS
        ]
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None
        self._loader = loader

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast reload events."""
        async for changes in awatch(self._source_dir):
            paths = [Path(path_str) for _, path_str in changes]
            await self.handle_changes(paths)

    async def handle_changes(self, paths: list[Path]) -> list[str]:
        """Invalidate the index and notify clients about changed files.

        Args:
            paths: Absolute paths reported by the watcher

        Returns:
            Relative paths that matched the watch patterns
        """
        relevant = [
            relative
            for relative in (self._to_relative(path) for path in paths)
            if relative is not None and self._matches_patterns(relative)
        ]
        if not relevant:
            return []

        logger.info(f"{len(relevant)} content file(s) changed, reloading items")
        if self._loader is not None:
            self._loader.invalidate()

        for relative in relevant:
            await self._broadcast_reload(relative)
        return relevant

    def _to_relative(self, path: Path) -> str | None:
        try:
            return path.resolve().relative_to(self._source_dir.resolve()).as_posix()
        except ValueError:
            return None

    def _matches_patterns(self, relative: str) -> bool:
        """Check if a relative path matches any watch pattern."""
        return any(pattern.match(relative) for pattern in self._watch_patterns)

    async def _broadcast_reload(self, path: str) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            path: Path of the changed file relative to the content directory
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "path": path})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
