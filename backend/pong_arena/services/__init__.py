from .errors import InvalidInput, LobbyError, LobbyFull, LobbyNotFound, MalformedMessage, UnknownMessageType
from .game_manager import GameManager
from .lobby_manager import LobbyManager
from .models import Lobby, Player
from .session_manager import SessionManager

__all__ = [
    "GameManager",
    "InvalidInput",
    "Lobby",
    "LobbyError",
    "LobbyFull",
    "LobbyManager",
    "LobbyNotFound",
    "MalformedMessage",
    "Player",
    "SessionManager",
    "UnknownMessageType",
]
