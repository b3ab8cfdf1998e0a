"""
Audience Dice Real-time Transport.

Socket.IO server and broadcast fan-out for rollers, host and display.
"""

from src.realtime.gateway import BroadcastGateway
from src.realtime.server import RollerServer, create_app, create_server

__all__ = [
    "BroadcastGateway",
    "RollerServer",
    "create_app",
    "create_server",
]
