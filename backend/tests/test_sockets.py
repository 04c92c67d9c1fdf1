import pytest
from starlette.websockets import WebSocketDisconnect


def open_lobby(client, *guests):
    data = client.post("/api/lobby/create", json={"hostName": "Alice"}).json()
    code = data["lobbyCode"]
    ids = [data["hostId"]]
    for name in guests:
        ids.append(client.post("/api/lobby/join", json={"lobbyCode": code, "playerName": name}).json()["playerId"])
    return code, ids


def ws_url(code, player_id):
    return f"/ws?lobbyCode={code}&playerId={player_id}"


def receive_until(ws, message_type, limit=20):
    for _ in range(limit):
        data = ws.receive_json()
        if data["type"] == message_type:
            return data
    raise AssertionError(f"{message_type} not received")


@pytest.mark.parametrize("url", ["/ws", "/ws?lobbyCode=ABCD", "/ws?playerId=player-x"])
def test_missing_parameters_are_rejected(client, url):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(url):
            pass
    assert exc.value.code == 1008


def test_unknown_lobby_or_player_is_rejected(client):
    code, _ = open_lobby(client)

    for url in (ws_url("NO-SUCH", "player-x"), ws_url(code, "player-x")):
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect(url):
                pass
        assert exc.value.code == 1008


def test_attach_receives_snapshot(client):
    code, ids = open_lobby(client, "Bob")

    with client.websocket_connect(ws_url(code, ids[1])) as ws:
        data = ws.receive_json()

    assert data["type"] == "GAME_STATE_UPDATE"
    assert data["payload"]["status"] == "WAITING"
    assert [p["name"] for p in data["payload"]["players"]] == ["Alice", "Bob"]


def test_bad_messages_do_not_close_channel(client):
    code, ids = open_lobby(client, "Bob")

    with client.websocket_connect(ws_url(code, ids[0])) as ws:
        ws.receive_json()
        ws.send_text("{not json")
        ws.send_bytes(b"\x00\x01")
        ws.send_json({"type": "CHAT", "payload": {"text": "hi"}})
        ws.send_json({"type": "MOVE_PADDLE"})
        ws.send_json({"type": "PLAYER_READY"})

        data = receive_until(ws, "GAME_STATE_UPDATE")

    assert data["payload"]["players"][0]["isReady"] is True


def test_explicit_leave(client):
    code, ids = open_lobby(client, "Bob")

    with client.websocket_connect(ws_url(code, ids[0])) as alice:
        alice.receive_json()
        with client.websocket_connect(ws_url(code, ids[1])) as bob:
            bob.receive_json()
            bob.send_json({"type": "LEAVE_LOBBY"})
            with pytest.raises(WebSocketDisconnect):
                bob.receive_json()

        left = receive_until(alice, "PLAYER_LEFT")
        assert left["payload"] == {"playerName": "Bob"}
        status = client.get("/api/lobby/status", params={"lobbyCode": code}).json()
        assert status["players"] == ["Alice"]


def test_last_leave_destroys_lobby(client):
    code, ids = open_lobby(client)

    with client.websocket_connect(ws_url(code, ids[0])) as ws:
        ws.receive_json()
        ws.send_json({"type": "LEAVE_LOBBY"})
        with pytest.raises(WebSocketDisconnect):
            ws.receive_json()

    assert client.get("/api/lobby/status", params={"lobbyCode": code}).status_code == 404


def test_two_player_game_streams_state(client):
    code, ids = open_lobby(client, "Bob")

    with client.websocket_connect(ws_url(code, ids[0])) as alice:
        alice.receive_json()
        with client.websocket_connect(ws_url(code, ids[1])) as bob:
            bob.receive_json()
            alice.send_json({"type": "PLAYER_READY"})
            bob.send_json({"type": "PLAYER_READY"})

            start = receive_until(alice, "GAME_START")
            assert isinstance(start["payload"]["startTime"], int)

            frames = [alice.receive_json() for _ in range(5)]
            assert all(frame["type"] == "GAME_STATE_UPDATE" for frame in frames)
            assert all(frame["payload"]["status"] == "PLAYING" for frame in frames)
            balls = [(f["payload"]["ball"]["x"], f["payload"]["ball"]["y"]) for f in frames]
            assert all(a != b for a, b in zip(balls, balls[1:]))

            bob.send_json({"type": "MOVE_PADDLE", "payload": {"direction": "DOWN"}})
            moved = None
            for _ in range(50):
                frame = receive_until(bob, "GAME_STATE_UPDATE")
                paddle = next(p for p in frame["payload"]["paddles"] if p["playerId"] == ids[1])
                if paddle["y"] == 260:
                    moved = paddle
                    break
            assert moved is not None

            bob.send_json({"type": "LEAVE_LOBBY"})
            with pytest.raises(WebSocketDisconnect):
                while True:
                    bob.receive_json()

        over = receive_until(alice, "GAME_OVER", limit=5000)
        assert over["payload"] == {"winner": "Unknown"}
        final = alice.receive_json()
        assert final["type"] == "GAME_STATE_UPDATE"
        assert final["payload"]["status"] == "GAME_OVER"
