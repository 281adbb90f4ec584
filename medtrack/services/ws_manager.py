"""
WebSocket Connection Manager for realtime change signals.

Every device a family signs in on keeps one connection open. After any
change to medications or logs, all of that user's connections get a
payload-free signal and reload their data.
"""

import logging
import asyncio
import time
from typing import Dict, Set, Optional, Any
from dataclasses import dataclass, field
from fastapi import WebSocket

from medtrack.helpers.enums import ChangeEvent, ChangeTable

logger = logging.getLogger(__name__)


@dataclass
class WebSocketConnection:
    """
    A single subscribed device.

    Attributes:
        websocket: The WebSocket instance
        user_id: Account the device is signed in to
        connected_at: Connection timestamp
        last_activity: Last successful send timestamp
        is_active: Whether connection is active
        sent_count: Number of signals delivered
        error_count: Number of failed sends
    """
    websocket: WebSocket
    user_id: str
    connected_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)
    is_active: bool = True
    sent_count: int = 0
    error_count: int = 0

    def __hash__(self) -> int:
        return hash((id(self.websocket), self.user_id))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebSocketConnection):
            return False
        return id(self.websocket) == id(other.websocket) and self.user_id == other.user_id

    def mark_sent(self) -> None:
        self.sent_count += 1
        self.last_activity = time.time()


class RealtimeConnectionManager:
    """
    Groups WebSocket connections by user and fans change signals out to them.

    Usage:
        manager = RealtimeConnectionManager()

        # In WebSocket endpoint
        await manager.connect(websocket, user_id)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.disconnect(websocket, user_id)

        # After a write
        await manager.publish_change(user_id, ChangeTable.MEDICATIONS, ChangeEvent.INSERT)
    """

    def __init__(self, max_connections_per_user: int = 10):
        # user_id -> set of WebSocketConnection
        self._connections: Dict[str, Set[WebSocketConnection]] = {}
        # websocket -> WebSocketConnection (for fast lookup)
        self._websocket_map: Dict[WebSocket, WebSocketConnection] = {}
        self._max_per_user = max_connections_per_user
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, user_id: str) -> Optional[WebSocketConnection]:
        """
        Accept and register a connection.

        Returns:
            The registered connection, or None when the user already has the
            maximum number of open connections (the socket is closed).
        """
        async with self._lock:
            connections = self._connections.setdefault(user_id, set())
            if len(connections) >= self._max_per_user:
                logger.warning(f"Max connections reached for user: {user_id}")
                await websocket.close(code=4003, reason="Max connections reached")
                if not connections:
                    del self._connections[user_id]
                return None

            await websocket.accept()

            connection = WebSocketConnection(websocket=websocket, user_id=user_id)
            connections.add(connection)
            self._websocket_map[websocket] = connection

            logger.info(f"WebSocket connected: user_id={user_id}, total={len(connections)}")
            return connection

    async def disconnect(self, websocket: WebSocket, user_id: str) -> None:
        async with self._lock:
            connection = self._websocket_map.pop(websocket, None)
            if not connection:
                return

            connection.is_active = False
            if user_id in self._connections:
                self._connections[user_id].discard(connection)
                if not self._connections[user_id]:
                    del self._connections[user_id]

            logger.info(
                f"WebSocket disconnected: user_id={user_id}, "
                f"sent={connection.sent_count}, errors={connection.error_count}"
            )

    async def send_to_user(self, user_id: str, data: Dict[str, Any]) -> int:
        """
        Send ``data`` to every open connection of ``user_id``.

        Returns:
            int: Number of connections that received the data
        """
        sent_count = 0
        dead_connections = []

        for connection in list(self._connections.get(user_id, ())):
            if not connection.is_active:
                continue
            try:
                await connection.websocket.send_json(data)
                connection.mark_sent()
                sent_count += 1
            except Exception as e:
                connection.error_count += 1
                dead_connections.append(connection)
                logger.warning(f"Failed to send to connection: {e}")

        for conn in dead_connections:
            await self.disconnect(conn.websocket, user_id)

        return sent_count

    async def publish_change(self, user_id: str, table: ChangeTable, event: ChangeEvent) -> int:
        """Signal that rows of ``table`` changed for ``user_id``."""
        return await self.send_to_user(user_id, {
            "type": "change",
            "table": table.value,
            "event": event.value,
        })

    def get_total_connections(self) -> int:
        return len(self._websocket_map)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total_connections": self.get_total_connections(),
            "users_with_connections": len(self._connections),
        }

    async def cleanup_all(self) -> int:
        """Close every connection; used on shutdown."""
        count = 0
        for user_id, connections in list(self._connections.items()):
            for connection in list(connections):
                try:
                    await connection.websocket.close(code=1000, reason="Server shutting down")
                    count += 1
                except Exception as e:
                    logger.warning(f"Error closing WebSocket: {e}")
                finally:
                    await self.disconnect(connection.websocket, user_id)
        return count


# ==================== GLOBAL INSTANCE ====================

realtime_manager = RealtimeConnectionManager()
