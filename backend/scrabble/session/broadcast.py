"""Shared broadcast utility for sending messages to a group of connections."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scrabble.messaging.protocol import ConnectionProtocol


async def send_quietly(connection: ConnectionProtocol, message: dict[str, Any]) -> None:
    """Send to one connection, ignoring a socket that has already gone away."""
    with contextlib.suppress(RuntimeError, OSError, ConnectionError):
        await connection.send_message(message)


async def broadcast_to_connections(
    connections: Iterable[ConnectionProtocol],
    message: dict[str, Any],
    exclude_connection_id: str | None = None,
) -> None:
    """Broadcast a message to every connection, skipping one if excluded.

    Snapshot the recipients via list() so a concurrent disconnect that
    mutates the source collection while we yield on send cannot raise.
    """
    for connection in list(connections):
        if connection.connection_id != exclude_connection_id:
            await send_quietly(connection, message)
