"""
Websocket message models and validation.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from unotable.engine import Color


class IntentType(str, Enum):
    """Inbound event types."""
    JOIN = "game/join"
    TOGGLE_READY = "game/toggle-ready"
    PICKUP_CARD = "game/pickup-card"
    PLACE_CARD = "game/place-card"
    UPDATE_NAME = "user/update-name"


class Envelope(BaseModel):
    """Every message on the socket: an event name and its data."""
    event: str = Field(..., min_length=1)
    data: Any = None


class JoinIntent(BaseModel):
    """Take a seat in the lobby."""
    type: IntentType = IntentType.JOIN


class ToggleReadyIntent(BaseModel):
    """Flip the ready flag."""
    type: IntentType = IntentType.TOGGLE_READY


class PickupCardIntent(BaseModel):
    """Draw a card and pass the turn."""
    type: IntentType = IntentType.PICKUP_CARD


class PlaceCardIntent(BaseModel):
    """Play a card. Wild cards need a color."""
    type: IntentType = IntentType.PLACE_CARD
    card_id: str = Field(..., min_length=1, max_length=64)
    color: Optional[Color] = None


class UpdateNameIntent(BaseModel):
    """Change the display name."""
    type: IntentType = IntentType.UPDATE_NAME
    name: str = Field(..., min_length=1, max_length=30)


Intent = Union[JoinIntent, ToggleReadyIntent, PickupCardIntent, PlaceCardIntent, UpdateNameIntent]


def parse_intent(raw: Dict[str, Any]) -> Intent:
    """Validate a decoded message. Raises ValueError for anything malformed."""
    envelope = Envelope.model_validate(raw)
    try:
        intent_type = IntentType(envelope.event)
    except ValueError:
        raise ValueError(f"Unknown event: {envelope.event}") from None

    data = envelope.data
    if intent_type == IntentType.JOIN:
        return JoinIntent()
    if intent_type == IntentType.TOGGLE_READY:
        return ToggleReadyIntent()
    if intent_type == IntentType.PICKUP_CARD:
        return PickupCardIntent()
    if intent_type == IntentType.PLACE_CARD:
        if isinstance(data, str):
            data = {"card_id": data}
        return PlaceCardIntent.model_validate(data or {})
    if isinstance(data, str):
        data = {"name": data.strip()}
    return UpdateNameIntent.model_validate(data or {})


def encode(event: str, payload: Any) -> str:
    """Serialize an outbound event."""
    return Envelope(event=event, data=payload).model_dump_json()
