"""Real-time arena pong: lobbies, an authoritative tick loop and a WebSocket protocol."""
