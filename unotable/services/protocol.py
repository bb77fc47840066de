"""Protocols for the collaborators the orchestrator talks to."""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Protocol


@dataclass
class Profile:
    """Persisted display name and win count for a user."""

    user_id: str
    name: str
    wins: int = 0


@dataclass(frozen=True)
class Connection:
    """A transport connection identified as a stable user."""

    connection_id: str
    user_id: str
    session_id: str

    def to_dict(self) -> dict:
        return {"user_id": self.user_id, "session_id": self.session_id}


class ProfileStore(Protocol):
    """Key-value store of profiles keyed by user id."""

    def get_profiles(self, user_ids: Iterable[str]) -> List[Profile]:
        """Return profiles in the order given, creating defaults for unseen ids."""
        ...

    def update_name(self, user_id: str, name: str) -> None:
        ...

    def increment_wins(self, user_id: str) -> None:
        ...


class BroadcastChannel(Protocol):
    """Delivers events to connected parties."""

    def emit(self, event: str, payload: Any, to: Optional[str] = None) -> None:
        """Send an event to one connection id, or to everyone when to is None."""
        ...


class IdentityProvider(Protocol):
    """Maps a transport handshake to a stable user identity."""

    def identify(
        self,
        connection_id: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> Connection:
        ...
