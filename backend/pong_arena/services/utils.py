from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from .models import Lobby
from .protocol import GAME_STATE_UPDATE


def message(message_type: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if payload is None:
        return {"type": message_type}
    return {"type": message_type, "payload": payload}


def is_open(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )


async def safe_send(websocket: Optional[WebSocket], payload: Dict) -> None:
    """Send JSON over a websocket, ignoring errors when the peer is gone."""
    if websocket is None:
        return
    try:
        await websocket.send_json(payload)
    except WebSocketDisconnect:
        pass
    except RuntimeError:
        # Raised when the connection is already closing/closed
        pass


async def safe_close(websocket: WebSocket, code: int = 1000, reason: Optional[str] = None) -> None:
    try:
        await websocket.close(code=code, reason=reason)
    except RuntimeError:
        pass


async def broadcast(lobby: Lobby, payload: Dict) -> None:
    """Push one serialized message to every open channel of the lobby."""
    text = json.dumps(payload)
    for websocket in list(lobby.connections.values()):
        if not is_open(websocket):
            continue
        try:
            await websocket.send_text(text)
        except WebSocketDisconnect:
            pass
        except RuntimeError:
            pass


async def broadcast_state(lobby: Lobby) -> None:
    await broadcast(lobby, message(GAME_STATE_UPDATE, lobby.snapshot()))
