from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import WebSocket

from .constants import CLOSE_POLICY_VIOLATION
from .lobby_manager import LobbyManager
from .protocol import GAME_STATE_UPDATE
from .utils import message, safe_close, safe_send

if TYPE_CHECKING:
    from .game_manager import GameManager

logger = logging.getLogger("lobby.session")


class SessionManager:
    """Binds live channels to lobby members."""

    def __init__(self, lobby_manager: LobbyManager, game_manager: "GameManager") -> None:
        self.lobby_manager = lobby_manager
        self.game_manager = game_manager

    async def attach(self, code: str, player_id: str, websocket: WebSocket) -> bool:
        lobby = await self.lobby_manager.get_lobby(code)
        if not lobby:
            await self._reject(websocket, code, player_id, "Lobby not found")
            return False
        if not lobby.get_player(player_id):
            await self._reject(websocket, code, player_id, "Player not found in lobby")
            return False
        if player_id in lobby.connections:
            await self._reject(websocket, code, player_id, "Player already connected")
            return False

        await websocket.accept()
        async with lobby.lock:
            # Membership may have changed while the handshake completed.
            if lobby.closed or not lobby.get_player(player_id) or player_id in lobby.connections:
                await safe_close(websocket, CLOSE_POLICY_VIOLATION, "Player not found in lobby")
                return False
            lobby.connections[player_id] = websocket
            await safe_send(websocket, message(GAME_STATE_UPDATE, lobby.snapshot()))
        logger.info("Player %s attached to lobby %s", player_id, code)
        return True

    async def detach(self, code: str, player_id: str) -> None:
        logger.info("Player %s detached from lobby %s", player_id, code)
        await self.game_manager.leave(code, player_id)

    async def _reject(self, websocket: WebSocket, code: str, player_id: str, reason: str) -> None:
        logger.warning("Rejecting channel for %s in lobby %s: %s", player_id, code, reason)
        await websocket.close(code=CLOSE_POLICY_VIOLATION, reason=reason)
