from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..services import LobbyManager

router = APIRouter()


class CreateLobbyRequest(BaseModel):
    hostName: Optional[str] = None


class JoinLobbyRequest(BaseModel):
    lobbyCode: Optional[str] = None
    playerName: Optional[str] = None


def _lobby_manager(request: Request) -> LobbyManager:
    return request.app.state.lobby_manager


@router.post("/create")
async def create_lobby(payload: CreateLobbyRequest, request: Request):
    code, host_id = await _lobby_manager(request).create_lobby(payload.hostName)
    return {"lobbyCode": code, "hostId": host_id}


@router.post("/join")
async def join_lobby(payload: JoinLobbyRequest, request: Request):
    player_id = await _lobby_manager(request).join_lobby(payload.lobbyCode, payload.playerName)
    return {"playerId": player_id, "lobbyCode": payload.lobbyCode}


@router.get("/status")
async def lobby_status(request: Request, lobbyCode: Optional[str] = None):
    players = await _lobby_manager(request).get_status(lobbyCode)
    return {"lobbyCode": lobbyCode, "players": players}
