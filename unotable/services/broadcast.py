"""In-process broadcast channel."""

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass
class Emitted:
    event: str
    payload: Any
    to: Optional[str] = None


class RecordingChannel:
    """Broadcast channel that keeps every event in memory, in order."""

    def __init__(self) -> None:
        self.events: List[Emitted] = []

    def emit(self, event: str, payload: Any, to: Optional[str] = None) -> None:
        self.events.append(Emitted(event, payload, to))

    def of(self, event: str) -> List[Emitted]:
        return [e for e in self.events if e.event == event]

    def last(self, event: str) -> Optional[Emitted]:
        matching = self.of(event)
        return matching[-1] if matching else None

    def clear(self) -> None:
        self.events.clear()
