"""
FastAPI websocket server that carries intents in and broadcasts state out.
"""

import asyncio
import json
import logging
import threading
import uuid
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from unotable import __version__
from unotable.config import Settings
from unotable.engine import ErrorCode
from unotable.orchestration import DeadlineWatchdog, TurnOrchestrator, conceal_hands
from unotable.orchestration.orchestrator import ERROR, GAME_STATE
from unotable.services import IdentityProvider, ProfileStore, SessionIssuer, SqliteProfileStore
from unotable.services.protocol import Connection
from unotable.transport.events import (
    Intent,
    JoinIntent,
    PickupCardIntent,
    PlaceCardIntent,
    ToggleReadyIntent,
    UpdateNameIntent,
    encode,
    parse_intent,
)

logger = logging.getLogger(__name__)


@dataclass
class _Outbox:
    user_id: str
    loop: asyncio.AbstractEventLoop
    queue: "asyncio.Queue[str]"


class ConnectionManager:
    """Broadcast channel over websockets.

    The orchestrator emits synchronously, possibly from the watchdog thread,
    so messages go into a per-connection queue on that connection's event
    loop and a sender task writes them to the socket.
    """

    def __init__(self, conceal: bool = False):
        self._conceal = conceal
        self._outboxes: Dict[str, _Outbox] = {}
        self._lock = threading.Lock()

    def register(self, connection: Connection, loop: asyncio.AbstractEventLoop) -> "asyncio.Queue[str]":
        queue: "asyncio.Queue[str]" = asyncio.Queue()
        with self._lock:
            self._outboxes[connection.connection_id] = _Outbox(connection.user_id, loop, queue)
        return queue

    def unregister(self, connection_id: str) -> None:
        with self._lock:
            self._outboxes.pop(connection_id, None)

    def __len__(self) -> int:
        return len(self._outboxes)

    def emit(self, event: str, payload: Any, to: Optional[str] = None) -> None:
        with self._lock:
            if to is None:
                targets = list(self._outboxes.values())
            else:
                targets = [self._outboxes[to]] if to in self._outboxes else []

        for outbox in targets:
            data = payload
            if self._conceal and event == GAME_STATE:
                data = conceal_hands(payload, outbox.user_id)
            try:
                outbox.loop.call_soon_threadsafe(outbox.queue.put_nowait, encode(event, data))
            except RuntimeError:
                # Loop already closed; the connection is on its way out
                logger.warning("Dropped %s for closed connection of %s", event, outbox.user_id)


def dispatch(orchestrator: TurnOrchestrator, connection_id: str, intent: Intent) -> None:
    """Route a validated intent to the orchestrator."""
    if isinstance(intent, JoinIntent):
        orchestrator.join(connection_id)
    elif isinstance(intent, ToggleReadyIntent):
        orchestrator.toggle_ready(connection_id)
    elif isinstance(intent, PickupCardIntent):
        orchestrator.draw(connection_id)
    elif isinstance(intent, PlaceCardIntent):
        orchestrator.play(connection_id, intent.card_id, intent.color)
    elif isinstance(intent, UpdateNameIntent):
        orchestrator.update_name(connection_id, intent.name)
    else:
        raise ValueError(f"Unhandled intent type: {type(intent)}")


async def _drain(websocket: WebSocket, queue: "asyncio.Queue[str]") -> None:
    while True:
        message = await queue.get()
        await websocket.send_text(message)


async def _stop_sender(sender: "asyncio.Task[None]") -> None:
    """Cancel the outbox sender and collect its result, including a failed send."""
    sender.cancel()
    with suppress(asyncio.CancelledError, Exception):
        await sender


def create_app(
    settings: Optional[Settings] = None,
    profiles: Optional[ProfileStore] = None,
    identity: Optional[IdentityProvider] = None,
) -> FastAPI:
    """Build the app with one orchestrator and its deadline watchdog."""
    settings = settings or Settings.from_env()
    manager = ConnectionManager(conceal=settings.conceal_hands)
    if profiles is None:
        profiles = SqliteProfileStore(settings.database)
    orchestrator = TurnOrchestrator(manager, profiles, settings)
    watchdog = DeadlineWatchdog(orchestrator, settings.tick_interval)
    identity = identity or SessionIssuer()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        watchdog.start()
        yield
        watchdog.stop(timeout=settings.tick_interval * 2)

    app = FastAPI(title="unotable", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.orchestrator = orchestrator
    app.state.manager = manager

    @app.get("/health")
    async def health_check():
        snapshot = await run_in_threadpool(orchestrator.snapshot)
        return {
            "status": "healthy",
            "round": snapshot["status"],
            "players": len(snapshot["players"]),
            "connections": len(manager),
        }

    @app.websocket("/ws")
    async def websocket_endpoint(
        websocket: WebSocket,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ):
        await websocket.accept()
        connection = identity.identify(uuid.uuid4().hex, user_id, session_id)
        connection_id = connection.connection_id
        queue = manager.register(connection, asyncio.get_running_loop())
        sender = asyncio.create_task(_drain(websocket, queue))
        await run_in_threadpool(orchestrator.connect, connection)

        try:
            while True:
                raw = await websocket.receive_text()
                try:
                    intent = parse_intent(json.loads(raw))
                    await run_in_threadpool(dispatch, orchestrator, connection_id, intent)
                except ValueError as e:
                    # Malformed JSON or a message that failed validation
                    manager.emit(
                        ERROR,
                        {"message": str(e), "code": ErrorCode.INVALID_EVENT.value},
                        to=connection_id,
                    )
                except Exception:
                    logger.exception("Error handling message from %s", connection.user_id)
                    manager.emit(
                        ERROR,
                        {"message": "Internal server error", "code": ErrorCode.INTERNAL.value},
                        to=connection_id,
                    )
        except WebSocketDisconnect:
            logger.info("WebSocket for %s disconnected", connection.user_id)
        finally:
            manager.unregister(connection_id)
            await run_in_threadpool(orchestrator.disconnect, connection_id)
            await _stop_sender(sender)

    return app
