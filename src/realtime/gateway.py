"""
Audience Dice - Broadcast Gateway

Sends controller Notifications over the Socket.IO server: broadcasts go to
every open connection, targeted notifications only to their connection.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from src.engine.controller import RoundController
from src.engine.events import Notification, OutboundEvent

logger = logging.getLogger(__name__)


class Emitter(Protocol):
    """The part of socketio.AsyncServer the gateway relies on."""

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None: ...


class BroadcastGateway:
    """Fans out state to all observers and acknowledgements to one."""

    def __init__(self, emitter: Emitter, controller: RoundController) -> None:
        self._emitter = emitter
        self._controller = controller

    async def broadcast_state(self) -> None:
        """Send a fresh Summary to every open connection."""
        await self.send(Notification(OutboundEvent.ROLLS_UPDATE, self._controller.summary()))

    async def send_state(self, connection_id: str) -> None:
        """Send a fresh Summary to a single connection."""
        await self.send(
            Notification(OutboundEvent.ROLLS_UPDATE, self._controller.summary(), to=connection_id)
        )

    async def dispatch(self, notifications: Iterable[Notification]) -> None:
        """Send notifications in order."""
        for notification in notifications:
            await self.send(notification)

    async def send(self, notification: Notification) -> None:
        data = notification.data.to_wire() if notification.data is not None else None
        event = notification.event.value

        if notification.is_broadcast:
            logger.debug("Broadcasting %s", event)
            await self._emitter.emit(event, data)
        else:
            logger.debug("Sending %s to %s", event, notification.to)
            await self._emitter.emit(event, data, to=notification.to)
