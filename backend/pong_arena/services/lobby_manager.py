from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

from .constants import (
    LOBBY_CODE_ALPHABET,
    LOBBY_CODE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PLAYERS,
    SIDE_ROTATION,
    STATUS_WAITING,
)
from .errors import InvalidInput, LobbyFull, LobbyNotFound
from .models import Lobby, Player
from .protocol import PLAYER_JOINED
from .utils import broadcast, message

logger = logging.getLogger("lobby")


def generate_lobby_code() -> str:
    return "".join(random.choice(LOBBY_CODE_ALPHABET) for _ in range(LOBBY_CODE_LENGTH))


def generate_player_id() -> str:
    from uuid import uuid4

    return f"player-{uuid4()}"


def sanitize_name(name: Optional[str]) -> str:
    return name.strip()[:MAX_NAME_LENGTH] if isinstance(name, str) else ""


def next_side(lobby: Lobby) -> str:
    """Side for the next joiner: the rotation slot for the current head count,
    or the first free slot after it when an earlier departure left a gap."""
    # Host TOP and Bob RIGHT, host leaves: the count is 1 again, so the plain
    # rotation would seat the next joiner on RIGHT next to Bob.
    taken = {player.side for player in lobby.players}
    count = len(lobby.players)
    for offset in range(len(SIDE_ROTATION)):
        side = SIDE_ROTATION[(count + offset) % len(SIDE_ROTATION)]
        if side not in taken:
            return side
    raise LobbyFull("Lobby is full")


class LobbyManager:
    """Process-wide registry of live lobbies, keyed by code."""

    def __init__(self, code_factory: Callable[[], str] = generate_lobby_code) -> None:
        self.lobbies: Dict[str, Lobby] = {}
        self.lock = asyncio.Lock()
        self.code_factory = code_factory

    async def create_lobby(self, host_name: Optional[str]) -> Tuple[str, str]:
        name = sanitize_name(host_name)
        if not name:
            raise InvalidInput("Host name is required")

        host = Player(generate_player_id(), name, SIDE_ROTATION[0])
        async with self.lock:
            code = self.code_factory()
            while code in self.lobbies:
                logger.debug("Lobby code %s already in use; retrying", code)
                code = self.code_factory()
            self.lobbies[code] = Lobby(code, host)
        logger.info("Lobby %s created by %s (%s)", code, host.id, host.name)
        return code, host.id

    async def join_lobby(self, code: Optional[str], player_name: Optional[str]) -> str:
        name = sanitize_name(player_name)
        if not code or not name:
            raise InvalidInput("Lobby code and player name are required")

        lobby = await self.get_lobby(code)
        if not lobby:
            raise LobbyNotFound("Lobby not found")

        async with lobby.lock:
            if lobby.closed:
                raise LobbyNotFound("Lobby not found")
            if lobby.state.status != STATUS_WAITING:
                raise InvalidInput("Game already in progress")
            if len(lobby.players) >= MAX_PLAYERS:
                raise LobbyFull("Lobby is full")
            player = Player(generate_player_id(), name, next_side(lobby))
            lobby.players.append(player)
            lobby.state.scores[player.id] = 0
            logger.info("Player %s (%s) joined lobby %s at %s", player.id, name, code, player.side)
            await broadcast(lobby, message(PLAYER_JOINED, {"playerName": name}))
        return player.id

    async def get_status(self, code: Optional[str]) -> List[str]:
        if not code:
            raise InvalidInput("Lobby code is required")
        lobby = await self.get_lobby(code)
        if not lobby:
            raise LobbyNotFound("Lobby not found")
        return [player.name for player in lobby.players]

    async def get_lobby(self, code: str) -> Optional[Lobby]:
        async with self.lock:
            return self.lobbies.get(code)

    async def destroy(self, code: str) -> None:
        async with self.lock:
            lobby = self.lobbies.pop(code, None)
        if not lobby:
            return
        lobby.closed = True
        lobby.host = None
        lobby.stop_loop()
        lobby.connections.clear()
        logger.info("Lobby %s destroyed", code)

    async def count(self) -> int:
        async with self.lock:
            return len(self.lobbies)

    async def shutdown(self) -> None:
        async with self.lock:
            codes = list(self.lobbies)
        for code in codes:
            await self.destroy(code)
