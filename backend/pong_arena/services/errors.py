from __future__ import annotations


class LobbyError(Exception):
    """Base for admission failures; carries the HTTP status it maps to."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(LobbyError):
    status_code = 400


class LobbyNotFound(LobbyError):
    status_code = 404


class LobbyFull(LobbyError):
    status_code = 400


class MessageError(Exception):
    """Raised for inbound channel messages that cannot be dispatched."""


class MalformedMessage(MessageError):
    pass


class UnknownMessageType(MessageError):
    def __init__(self, message_type: object) -> None:
        super().__init__(f"Unknown message type: {message_type!r}")
        self.message_type = message_type
