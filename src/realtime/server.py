"""
Audience Dice - Socket.IO Server

Wires Socket.IO transport events into the round controller and sends the
resulting notifications through the broadcast gateway. Each server owns
its own RoundState, so several independent instances can coexist.
"""

from __future__ import annotations

import logging
from typing import Any

import socketio
import uvicorn

from src.config import Settings, configure_logging, get_settings
from src.engine.controller import RoundController
from src.engine.events import InboundEvent, parse_command
from src.realtime.gateway import BroadcastGateway

logger = logging.getLogger(__name__)


class RollerServer:
    """Binds one RoundController to one socketio.AsyncServer."""

    def __init__(
        self,
        sio: socketio.AsyncServer,
        controller: RoundController | None = None,
    ) -> None:
        self.sio = sio
        self.controller = controller if controller is not None else RoundController()
        self.gateway = BroadcastGateway(sio, self.controller)

    def register_handlers(self) -> None:
        """Attach connect/disconnect and every inbound event handler."""
        self.sio.on("connect", handler=self.on_connect)
        self.sio.on("disconnect", handler=self.on_disconnect)
        for event in InboundEvent:
            self.sio.on(event.value, handler=self._handler_for(event))

    def _handler_for(self, event: InboundEvent):
        async def handler(sid: str, *args: Any) -> None:
            await self.handle_event(event, sid, args[0] if args else None)

        handler.__name__ = f"on_{event.name.lower()}"
        return handler

    async def on_connect(self, sid: str, environ: dict, auth: dict | None = None) -> None:
        # New clients get the current state right away; others see the new count.
        await self.gateway.dispatch(self.controller.connect(sid))

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        logger.info("Socket disconnected: %s reason: %s", sid, reason)
        await self.gateway.dispatch(self.controller.disconnect(sid))

    async def handle_event(self, event: InboundEvent, sid: str, data: Any = None) -> None:
        """Translate one inbound event into a command and send the results."""
        command = parse_command(event, data)
        if command is None:
            return
        logger.debug("%s requested by %s", event.value, sid)
        await self.gateway.dispatch(self.controller.apply(sid, command))


def create_server(settings: Settings | None = None) -> RollerServer:
    """Build a Socket.IO server with a fresh round controller."""
    settings = settings or get_settings()
    sio = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=settings.cors_origins,
        ping_interval=settings.ping_interval,
        ping_timeout=settings.ping_timeout,
        logger=False,
        engineio_logger=False,
    )
    server = RollerServer(sio)
    server.register_handlers()
    return server


def create_app(settings: Settings | None = None) -> socketio.ASGIApp:
    """ASGI app serving Socket.IO and, optionally, a static client build."""
    settings = settings or get_settings()
    server = create_server(settings)

    static_files = None
    if settings.static_dir:
        static_files = {"/": settings.static_dir.rstrip("/") + "/"}
        logger.info("Serving static files from %s", settings.static_dir)

    return socketio.ASGIApp(server.sio, static_files=static_files)


def main() -> None:
    """Run the server with uvicorn."""
    settings = get_settings()
    configure_logging(settings)

    app = create_app(settings)
    logger.info("Audience Dice running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
