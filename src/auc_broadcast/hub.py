"""ConnectionHub — fan-out of outbound events to connected WebSockets.

Two delivery modes:
  - send(): reply to one connection (login replies, rejections)
  - broadcast*(): every connection, optionally excluding the sender

Full-ledger payloads are built per role: admins see team passwords,
everyone else gets the redacted view.
"""

import logging
import uuid
from collections.abc import Callable
from typing import Any, Protocol

from src.auc_common.envelope import make_frame
from src.auc_common.enums import OutboundEvent, Role
from src.auc_gateway.auth.guard import Identity

logger = logging.getLogger(__name__)


class JsonSocket(Protocol):
    async def send_json(self, data: Any, mode: str = "text") -> None: ...


class Connection:
    """One connected client. Identity starts as listener until auth:login."""

    def __init__(self, socket: JsonSocket) -> None:
        self.id = f"conn_{uuid.uuid4().hex[:8]}"
        self.socket = socket
        self.identity = Identity(role=Role.LISTENER)

    @property
    def is_admin(self) -> bool:
        return self.identity.is_admin

    async def send(self, event: OutboundEvent | str, data: Any = None) -> None:
        name = event.value if isinstance(event, OutboundEvent) else event
        await self.socket.send_json(make_frame(name, data))


class ConnectionHub:
    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}

    @property
    def connections(self) -> list[Connection]:
        return list(self._connections.values())

    def __len__(self) -> int:
        return len(self._connections)

    def add(self, socket: JsonSocket) -> Connection:
        conn = Connection(socket)
        self._connections[conn.id] = conn
        logger.info("Client connected %s (total=%d)", conn.id, len(self._connections))
        return conn

    def remove(self, conn: Connection) -> None:
        if self._connections.pop(conn.id, None) is not None:
            logger.info("Client disconnected %s (total=%d)", conn.id, len(self._connections))

    async def send(self, conn: Connection, event: OutboundEvent | str, data: Any = None) -> None:
        try:
            await conn.send(event, data)
        except Exception:
            logger.exception("Send to %s failed; dropping connection", conn.id)
            self.remove(conn)

    async def broadcast(
        self,
        event: OutboundEvent | str,
        data: Any = None,
        exclude: Connection | None = None,
    ) -> None:
        for conn in self.connections:
            if conn is not exclude:
                await self.send(conn, event, data)

    async def broadcast_by_role(
        self,
        event: OutboundEvent | str,
        build: Callable[[bool], Any],
    ) -> None:
        """build(include_secrets) is evaluated at most twice, not per connection."""
        views: dict[bool, Any] = {}
        for conn in self.connections:
            admin = conn.is_admin
            if admin not in views:
                views[admin] = build(admin)
            await self.send(conn, event, views[admin])
