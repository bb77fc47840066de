"""
Websocket transport for the game server.
"""

from unotable.transport.server import ConnectionManager, create_app

__all__ = ["ConnectionManager", "create_app"]
