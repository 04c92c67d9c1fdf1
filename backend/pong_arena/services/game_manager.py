from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Optional

from . import physics
from .constants import (
    MIN_PLAYERS_TO_START,
    STATUS_GAME_OVER,
    STATUS_PLAYING,
    STATUS_WAITING,
    UNKNOWN_WINNER,
    WINNING_SCORE,
)
from .lobby_manager import LobbyManager
from .models import Lobby
from .protocol import GAME_OVER, GAME_START, PLAYER_LEFT
from .utils import broadcast, broadcast_state, message

logger = logging.getLogger("lobby.game")

DEFAULT_TICK_RATE = 60


class GameManager:
    """Per-lobby WAITING -> PLAYING -> GAME_OVER controller.

    Owns the tick loop of every PLAYING lobby. Each public coroutine takes the
    lobby lock for its whole run and is a no-op when the lobby or player has
    already gone away.
    """

    def __init__(
        self,
        lobby_manager: LobbyManager,
        tick_rate: float = DEFAULT_TICK_RATE,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.lobby_manager = lobby_manager
        self.tick_interval = 1.0 / tick_rate
        self.rng = rng or random.Random()

    async def mark_ready(self, code: str, player_id: str) -> None:
        lobby = await self.lobby_manager.get_lobby(code)
        if not lobby:
            return
        async with lobby.lock:
            player = lobby.get_player(player_id)
            if lobby.closed or not player:
                return
            if lobby.state.status != STATUS_WAITING:
                logger.debug("Ignoring ready from %s; lobby %s is %s", player_id, code, lobby.state.status)
                return
            player.ready = True
            logger.info("Player %s marked ready in lobby %s", player_id, code)
            if lobby.all_ready() and len(lobby.players) >= MIN_PLAYERS_TO_START:
                await self._start_game(lobby)
            else:
                await broadcast_state(lobby)

    async def move_paddle(self, code: str, player_id: str, direction: str) -> None:
        lobby = await self.lobby_manager.get_lobby(code)
        if not lobby:
            return
        async with lobby.lock:
            if lobby.closed or lobby.state.status != STATUS_PLAYING:
                return
            paddle = lobby.state.paddle_for(player_id)
            if not paddle:
                return
            if not physics.move_paddle(paddle, direction):
                logger.debug("Ignoring %s for %s paddle of %s", direction, paddle.side, player_id)
            await broadcast_state(lobby)

    async def leave(self, code: str, player_id: str) -> None:
        lobby = await self.lobby_manager.get_lobby(code)
        if not lobby:
            return
        async with lobby.lock:
            if lobby.closed:
                return
            player = lobby.remove_player(player_id)
            if not player:
                return
            lobby.connections.pop(player_id, None)
            if lobby.state.status != STATUS_PLAYING:
                # A game in progress keeps the entry until it ends.
                lobby.state.scores.pop(player_id, None)
            logger.info("Player %s (%s) left lobby %s", player_id, player.name, code)

            if not lobby.players:
                await self.lobby_manager.destroy(code)
                return
            if lobby.host == player_id:
                lobby.host = lobby.players[0].id
                logger.info("Lobby %s host passed to %s", code, lobby.host)

            await broadcast(lobby, message(PLAYER_LEFT, {"playerName": player.name}))
            if lobby.state.status == STATUS_PLAYING:
                await self._end_game(lobby, None)
            else:
                await broadcast_state(lobby)

    async def tick(self, code: str) -> bool:
        """Advance one PLAYING lobby by a single step.

        Returns False once the lobby is gone or no longer PLAYING, which tells
        the loop to stop.
        """
        lobby = await self.lobby_manager.get_lobby(code)
        if not lobby:
            return False
        async with lobby.lock:
            if lobby.closed or lobby.state.status != STATUS_PLAYING:
                return False
            state = lobby.state
            scoring_side = physics.advance_ball(state.ball, state.paddles, self.rng)
            if scoring_side:
                scorer = lobby.player_on_side(scoring_side)
                if scorer:
                    state.scores[scorer.id] = state.scores.get(scorer.id, 0) + 1
                    logger.debug("Lobby %s point to %s (%s)", code, scorer.id, state.scores[scorer.id])
                    if state.scores[scorer.id] >= WINNING_SCORE:
                        await self._end_game(lobby, scorer.id)
                        return False
            await broadcast_state(lobby)
            return True

    async def _start_game(self, lobby: Lobby) -> None:
        state = lobby.state
        state.paddles = [physics.build_paddle(player.id, player.side) for player in lobby.players]
        physics.reset_ball(state.ball, self.rng)
        state.scores = {player.id: 0 for player in lobby.players}
        state.status = STATUS_PLAYING
        logger.info("Lobby %s game started with %d players", lobby.code, len(lobby.players))

        await broadcast(lobby, message(GAME_START, {"startTime": int(time.time() * 1000)}))
        lobby.stop_loop()
        lobby.loop_task = asyncio.create_task(self._run_loop(lobby.code))

    async def _end_game(self, lobby: Lobby, winner_id: Optional[str]) -> None:
        lobby.stop_loop()
        lobby.state.status = STATUS_GAME_OVER

        winner_name = UNKNOWN_WINNER
        winner = lobby.get_player(winner_id) if winner_id else None
        if winner:
            winner_name = winner.name
        logger.info("Lobby %s game over; winner %s", lobby.code, winner_name)

        await broadcast(lobby, message(GAME_OVER, {"winner": winner_name}))
        for player in lobby.players:
            player.ready = False
        await broadcast_state(lobby)

    async def _run_loop(self, code: str) -> None:
        try:
            while True:
                await asyncio.sleep(self.tick_interval)
                if not await self.tick(code):
                    break
        except asyncio.CancelledError:
            logger.debug("Tick loop for lobby %s cancelled", code)
