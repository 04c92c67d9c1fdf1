from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from fastapi import WebSocket

from .constants import FIELD_CENTER, STATUS_WAITING


class Player:
    def __init__(self, player_id: str, name: str, side: str) -> None:
        self.id = player_id
        self.name = name
        self.side = side
        self.ready = False


class Ball:
    def __init__(self, x: float = FIELD_CENTER, y: float = FIELD_CENTER, vx: float = 0, vy: float = 0) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "velocityX": self.vx, "velocityY": self.vy}


class Paddle:
    def __init__(self, player_id: str, side: str, x: float, y: float, width: float, height: float) -> None:
        self.player_id = player_id
        self.side = side
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "position": self.side,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


class GameState:
    def __init__(self) -> None:
        self.status = STATUS_WAITING
        self.ball = Ball()
        self.paddles: List[Paddle] = []
        self.scores: Dict[str, int] = {}

    def paddle_for(self, player_id: str) -> Optional[Paddle]:
        for paddle in self.paddles:
            if paddle.player_id == player_id:
                return paddle
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "ball": self.ball.to_dict(),
            "paddles": [paddle.to_dict() for paddle in self.paddles],
            "scores": dict(self.scores),
        }


class Lobby:
    """A group of up to four players sharing one game.

    ``players`` keeps join order, which drives side assignment and host
    promotion. All mutation happens while holding ``lock``.
    """

    def __init__(self, code: str, host: Player) -> None:
        self.code = code
        self.players: List[Player] = [host]
        self.host: Optional[str] = host.id
        self.connections: Dict[str, WebSocket] = {}
        self.state = GameState()
        self.state.scores[host.id] = 0
        self.lock = asyncio.Lock()
        self.loop_task: Optional[asyncio.Task] = None
        self.closed = False

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_on_side(self, side: str) -> Optional[Player]:
        for player in self.players:
            if player.side == side:
                return player
        return None

    def remove_player(self, player_id: str) -> Optional[Player]:
        player = self.get_player(player_id)
        if player:
            self.players.remove(player)
        return player

    def all_ready(self) -> bool:
        return all(player.ready for player in self.players)

    def stop_loop(self) -> None:
        task = self.loop_task
        self.loop_task = None
        # The loop notices the status change on its own when this runs inside a tick.
        if task and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def snapshot(self) -> Dict[str, Any]:
        state = self.state.to_dict()
        state["players"] = [
            {
                "id": player.id,
                "name": player.name,
                "isReady": player.ready,
                "position": player.side,
                "isHost": player.id == self.host,
            }
            for player in self.players
        ]
        return state
