from __future__ import annotations

import json
from typing import Any, Dict, Tuple

from .errors import MalformedMessage, UnknownMessageType

# inbound
PLAYER_READY = "PLAYER_READY"
MOVE_PADDLE = "MOVE_PADDLE"
LEAVE_LOBBY = "LEAVE_LOBBY"

# outbound
GAME_STATE_UPDATE = "GAME_STATE_UPDATE"
PLAYER_JOINED = "PLAYER_JOINED"
PLAYER_LEFT = "PLAYER_LEFT"
GAME_START = "GAME_START"
GAME_OVER = "GAME_OVER"

INBOUND_TYPES = frozenset({PLAYER_READY, MOVE_PADDLE, LEAVE_LOBBY})


def parse_message(raw: str) -> Tuple[str, Dict[str, Any]]:
    """Decode an inbound frame into ``(type, payload)``.

    Raises MalformedMessage for anything that is not a JSON object with a
    usable payload and UnknownMessageType for a well-formed frame whose type
    is not handled.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedMessage(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedMessage("Message must be a JSON object")

    message_type = data.get("type")
    if message_type not in INBOUND_TYPES:
        raise UnknownMessageType(message_type)

    payload = data.get("payload") or {}
    if not isinstance(payload, dict):
        raise MalformedMessage("Payload must be a JSON object")
    if message_type == MOVE_PADDLE and not isinstance(payload.get("direction"), str):
        raise MalformedMessage("MOVE_PADDLE requires a direction")
    return message_type, payload
