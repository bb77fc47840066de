"""Turn orchestrator: the lobby and round state machine."""

import logging
import random
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional

from unotable.config import Settings
from unotable.engine import (
    AdvanceTurn,
    Color,
    ErrorCode,
    ErrorReaction,
    ForceDraw,
    PileEngine,
    Reaction,
)
from unotable.orchestration.interpreter import interpret_reactions
from unotable.orchestration.round_state import Player, RoundState, RoundStatus
from unotable.services.protocol import BroadcastChannel, Connection, ProfileStore

logger = logging.getLogger(__name__)

SESSION = "session"
CONNECTIONS_SYNC = "connections/sync"
GAME_STATE = "game/state"
GAME_END = "game/end"
ERROR = "error"


class TurnOrchestrator:
    """Validates player intents and drives the round.

    Every public method takes the same re-entrant lock, so intents from the
    transport and ticks from the deadline watchdog never interleave. Game
    errors are never raised: the offending connection gets an ``error`` event
    followed by a full state broadcast.
    """

    def __init__(
        self,
        channel: BroadcastChannel,
        profiles: ProfileStore,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self._channel = channel
        self._profiles = profiles
        self._settings = settings or Settings()
        self._clock = clock
        self._rng = rng
        self._lock = threading.RLock()
        self._connections: Dict[str, Connection] = {}
        self.state = RoundState()

    # Connections

    def connect(self, connection: Connection) -> None:
        """Register an identified connection and bring it up to date."""
        # First sight inserts a profile row, so warm the cache outside the lock
        self._profiles.get_profiles([connection.user_id])
        with self._lock:
            self._connections[connection.connection_id] = connection
            logger.info("Connection %s identified as %s", connection.connection_id, connection.user_id)
            self._channel.emit(SESSION, connection.to_dict(), to=connection.connection_id)
            self._sync()

    def disconnect(self, connection_id: str) -> None:
        with self._lock:
            connection = self._connections.pop(connection_id, None)
            if connection is not None:
                logger.info("Connection %s (%s) closed", connection_id, connection.user_id)
            self._sync()

    def connections(self) -> List[Connection]:
        with self._lock:
            return list(self._connections.values())

    # Intents

    def join(self, connection_id: str) -> None:
        with self._lock:
            connection = self._connections.get(connection_id)
            if connection is None:
                return self._reject(connection_id, "Connection not found.", ErrorCode.CONNECTION_NOT_FOUND)
            if self.state.find_player(connection.user_id) is not None:
                return self._reject(connection_id, "Player already joined.", ErrorCode.ALREADY_JOINED)
            if self.state.status != RoundStatus.WAITING:
                return self._reject(connection_id, "Game already started.", ErrorCode.GAME_STARTED)
            if len(self.state.players) >= self._settings.max_players:
                return self._reject(connection_id, "Game is full.", ErrorCode.GAME_FULL)

            self.state.players.append(Player(user_id=connection.user_id))
            self.state.reorganize()
            logger.info("%s joined the lobby (%d players)", connection.user_id, len(self.state.players))
            self._sync()

    def toggle_ready(self, connection_id: str) -> None:
        with self._lock:
            if self.state.status != RoundStatus.WAITING:
                return self._reject(connection_id, "Game already started.", ErrorCode.GAME_STARTED)
            connection = self._connections.get(connection_id)
            if connection is None:
                return self._reject(connection_id, "Connection not found.", ErrorCode.CONNECTION_NOT_FOUND)
            player = self.state.find_player(connection.user_id)
            if player is None:
                return self._reject(connection_id, "Player has not joined.", ErrorCode.NOT_JOINED)

            player.ready = not player.ready
            if self._can_start():
                self._start_round()
            else:
                self._sync()

    def draw(self, connection_id: str) -> None:
        with self._lock:
            player = self._acting_player(connection_id)
            if player is None:
                return
            self._handle_reactions(self.state.pile.draw(player.position), connection_id)

    def play(self, connection_id: str, card_id: str, color: Optional[Color] = None) -> None:
        winner_id = None
        with self._lock:
            player = self._acting_player(connection_id)
            if player is None:
                return
            reactions = self.state.pile.play(player.position, card_id, color)
            self._handle_reactions(reactions, connection_id)

            # A win can only happen after a card is played
            if self._has_winner():
                winner_id = self._finish_round()

        if winner_id is not None:
            self._profiles.increment_wins(winner_id)

    def update_name(self, connection_id: str, name: str) -> None:
        with self._lock:
            connection = self._connections.get(connection_id)
            if connection is None:
                return self._reject(connection_id, "Connection not found.", ErrorCode.CONNECTION_NOT_FOUND)

        # Persisted outside the lock
        self._profiles.update_name(connection.user_id, name)
        logger.info("%s is now called %s", connection.user_id, name)
        with self._lock:
            self._sync()

    def tick(self) -> bool:
        """Force a draw for the current player once their deadline has passed.

        Returns True when a forced draw happened.
        """
        with self._lock:
            if self.state.status != RoundStatus.PLAYING:
                return False
            player = self.state.current_player()
            if player is None or player.deadline is None:
                return False
            if player.deadline >= self._clock():
                return False

            logger.info("%s ran out of time at position %d", player.user_id, player.position)
            self._handle_reactions([ForceDraw(), AdvanceTurn()])
            return True

    # State

    def snapshot(self) -> dict:
        """Full round state, as broadcast on ``game/state``."""
        with self._lock:
            state = self.state
            pile = state.pile.to_dict() if state.pile else {"pile": [], "active_card": None, "pile_size": 0}
            return {
                "status": state.status.value,
                **pile,
                "current_position": state.position,
                "current_direction": state.direction,
                "players": self._resolve_players(state.players),
            }

    # Internals

    def _acting_player(self, connection_id: str) -> Optional[Player]:
        """Checks shared by draw and play. Rejects and returns None on failure."""
        if self.state.status != RoundStatus.PLAYING:
            self._reject(connection_id, "Game not started.", ErrorCode.GAME_NOT_STARTED)
            return None
        connection = self._connections.get(connection_id)
        if connection is None:
            self._reject(connection_id, "Connection not found.", ErrorCode.CONNECTION_NOT_FOUND)
            return None
        player = self.state.find_player(connection.user_id)
        if player is None:
            self._reject(connection_id, "Player has not joined.", ErrorCode.NOT_JOINED)
            return None
        if player.position != self.state.position:
            self._reject(connection_id, "Not your turn.", ErrorCode.NOT_YOUR_TURN)
            return None
        if self.state.pile is None:
            self._reject(connection_id, "Deck not found.", ErrorCode.DECK_NOT_INITIALIZED)
            return None
        return player

    def _reject(self, connection_id: Optional[str], message: str, code: ErrorCode) -> None:
        logger.warning("Rejected intent from %s: %s", connection_id, message)
        self._deliver_errors([ErrorReaction(message, code)], connection_id)
        self._sync()

    def _deliver_errors(self, errors: Iterable[ErrorReaction], connection_id: Optional[str]) -> None:
        for error in errors:
            self._channel.emit(ERROR, error.to_dict(), to=connection_id)

    def _handle_reactions(self, reactions: List[Reaction], connection_id: Optional[str] = None) -> None:
        errors = interpret_reactions(
            self.state, reactions, self._clock(), self._settings.turn_timeout
        )
        self._deliver_errors(errors, connection_id)
        self._sync()

    def _can_start(self) -> bool:
        players = self.state.players
        return len(players) >= self._settings.min_players and all(p.ready for p in players)

    def _start_round(self) -> None:
        state = self.state
        state.status = RoundStatus.PLAYING
        state.pile = PileEngine(len(state.players), rng=self._rng)

        current = state.current_player()
        if current is not None:
            current.deadline = self._clock() + self._settings.turn_timeout
        logger.info("Round started with %d players", len(state.players))
        self._sync()

    def _has_winner(self) -> bool:
        if self.state.pile is None:
            return False
        return sum(1 for hand in self.state.pile.hands if not hand) == 1

    def _finish_round(self) -> str:
        """Rank players by cards left, announce the podium and reset the lobby.

        Returns the winner's user id. The caller persists the win once the
        lock is released.
        """
        state = self.state
        podium = sorted(self._resolve_players(state.players), key=lambda p: p["hand_size"])
        winner = podium[0]
        winner["wins"] += 1
        logger.info("%s (%s) won the round", winner["name"], winner["user_id"])

        self._channel.emit(GAME_END, podium)
        state.reset()
        self._sync()
        return winner["user_id"]

    def _resolve_players(self, players: List[Player]) -> List[dict]:
        profiles = self._profiles.get_profiles(p.user_id for p in players)
        resolved = []
        for player, profile in zip(players, profiles):
            hand = self.state.hand(player)
            resolved.append(
                {
                    "user_id": player.user_id,
                    "name": profile.name,
                    "wins": profile.wins,
                    "position": player.position,
                    "ready": player.ready,
                    "deadline": player.deadline,
                    "hand": [c.to_dict() for c in hand],
                    "hand_size": len(hand),
                }
            )
        return resolved

    def _connected_user_ids(self) -> set:
        return {c.user_id for c in self._connections.values()}

    def _sync(self) -> None:
        """Broadcast connections and the full round state.

        While waiting, players without a live connection leave the lobby.
        """
        if self.state.status == RoundStatus.WAITING:
            online = self._connected_user_ids()
            self.state.players = [p for p in self.state.players if p.user_id in online]
            self.state.reorganize()

        self._channel.emit(CONNECTIONS_SYNC, [c.to_dict() for c in self._connections.values()])
        self._channel.emit(GAME_STATE, self.snapshot())

