import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..services import GameManager, SessionManager
from ..services.constants import CLOSE_POLICY_VIOLATION
from ..services.errors import MessageError
from ..services.protocol import LEAVE_LOBBY, MOVE_PADDLE, PLAYER_READY, parse_message
from ..services.utils import safe_close

logger = logging.getLogger("lobby.socket")

router = APIRouter()


@router.websocket("/ws")
async def game_endpoint(websocket: WebSocket) -> None:
    lobby_code = websocket.query_params.get("lobbyCode")
    player_id = websocket.query_params.get("playerId")

    if not lobby_code or not player_id:
        logger.warning("Rejecting channel without lobbyCode or playerId")
        await websocket.close(code=CLOSE_POLICY_VIOLATION, reason="Missing lobbyCode or playerId")
        return

    session_manager: SessionManager = websocket.app.state.session_manager
    game_manager: GameManager = websocket.app.state.game_manager

    if not await session_manager.attach(lobby_code, player_id, websocket):
        return

    left = False
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            raw = frame.get("text")
            if raw is None:
                raw = (frame.get("bytes") or b"").decode("utf-8", errors="replace")
            try:
                message_type, payload = parse_message(raw)
            except MessageError as exc:
                logger.warning("Dropping message from %s in lobby %s: %s", player_id, lobby_code, exc)
                continue

            if message_type == PLAYER_READY:
                await game_manager.mark_ready(lobby_code, player_id)
            elif message_type == MOVE_PADDLE:
                await game_manager.move_paddle(lobby_code, player_id, payload["direction"])
            elif message_type == LEAVE_LOBBY:
                left = True
                break

    except WebSocketDisconnect:
        pass
    finally:
        await session_manager.detach(lobby_code, player_id)

    if left:
        await safe_close(websocket)
