from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from guessgame.config import Settings
from guessgame.main import create_app


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app(
        Settings(round_timeout_sec=0, result_delay_sec=0, allow_client_timeout=True)
    )
    with TestClient(app) as c:
        yield c


def create_game(ws, username="alice") -> str:
    ws.send_json({"type": "create", "username": username})
    message = ws.receive_json()
    assert message["type"] == "gameCode"
    return message["gameCode"]


def join_game(host, guest, code, username="bob") -> None:
    guest.send_json({"type": "join", "gameCode": code, "username": username})
    assert host.receive_json() == {"type": "start", "playerNumber": 1, "opponent": username}
    assert host.receive_json() == {"type": "roundStart", "round": 1}
    assert guest.receive_json() == {"type": "start", "playerNumber": 2, "opponent": "alice"}
    assert guest.receive_json() == {"type": "roundStart", "round": 1}


def test_info(client: TestClient) -> None:
    resp = client.get("/info")
    assert resp.status_code == 200
    assert resp.json() == {"name": "guessgame", "games": 0}


def test_unknown_game_is_404(client: TestClient) -> None:
    assert client.get("/games/NOPE00").status_code == 404


def test_full_round_over_websockets(client: TestClient) -> None:
    with client.websocket_connect("/ws") as host:
        code = create_game(host)
        assert len(code) == 6

        with client.websocket_connect("/ws") as guest:
            join_game(host, guest, code.lower())

            host.send_json({"type": "number", "gameCode": code, "playerNumber": 1, "number": 40})
            guest.send_json({"type": "number", "gameCode": code, "playerNumber": 2, "number": 60})

            for ws in (host, guest):
                result = ws.receive_json()
                assert result["type"] == "result"
                assert result["numbers"] == [40, 60]
                assert result["average"] == 50
                assert result["target"] == pytest.approx(40)
                assert result["winner"] == 1
                assert result["scores"] == [0, -1]
                assert ws.receive_json() == {"type": "roundStart", "round": 2}

            summary = client.get(f"/games/{code}").json()
            assert summary["round"] == 2
            assert summary["phase"] == "round_open"
            assert summary["players"] == [
                {"username": "alice", "score": 0},
                {"username": "bob", "score": -1},
            ]


def test_bad_messages_are_dropped(client: TestClient) -> None:
    with client.websocket_connect("/ws") as host:
        host.send_text("not json")
        host.send_json({"type": "dance"})
        host.send_json({"type": "join", "gameCode": "NOPE00", "username": "alice"})
        host.send_json({"type": "number", "number": 10})

        code = create_game(host)
        host.send_json({"type": "create", "username": "alice"})

        with client.websocket_connect("/ws") as guest:
            join_game(host, guest, code)

            # seat mismatch and foreign game code are ignored
            guest.send_json({"type": "number", "playerNumber": 1, "number": 5})
            guest.send_json({"type": "number", "gameCode": "OTHER1", "number": 5})
            host.send_json({"type": "number", "number": 50})
            guest.send_json({"type": "number", "number": 50})

            result = host.receive_json()
            assert result["type"] == "result"
            assert result["numbers"] == [50, 50]
            assert result["winner"] == 1

    assert client.get("/info").json()["games"] == 0


def test_third_player_cannot_join(client: TestClient) -> None:
    with client.websocket_connect("/ws") as host:
        code = create_game(host)
        with client.websocket_connect("/ws") as guest:
            join_game(host, guest, code)
            with client.websocket_connect("/ws") as outsider:
                outsider.send_json({"type": "join", "gameCode": code, "username": "carol"})
                outsider.send_json({"type": "timeout", "gameCode": code})

            host.send_json({"type": "timeout", "gameCode": code})
            assert host.receive_json() == {"type": "timeout", "scores": [-1, -1]}
            assert host.receive_json() == {"type": "roundStart", "round": 2}

            summary = client.get(f"/games/{code}").json()
            assert [p["username"] for p in summary["players"]] == ["alice", "bob"]


def test_disconnect_ends_game(client: TestClient) -> None:
    with client.websocket_connect("/ws") as host:
        code = create_game(host)
        with client.websocket_connect("/ws") as guest:
            join_game(host, guest, code)

        assert host.receive_json() == {"type": "opponentLeft"}
        assert client.get(f"/games/{code}").status_code == 404

        # the connection can host a fresh game afterwards
        assert create_game(host) != code


def test_non_finite_numbers_are_rejected(client: TestClient) -> None:
    with client.websocket_connect("/ws") as host:
        code = create_game(host)
        with client.websocket_connect("/ws") as guest:
            join_game(host, guest, code)

            host.send_json({"type": "number", "number": 40})
            guest.send_text('{"type": "number", "number": NaN}')
            guest.send_text('{"type": "number", "number": Infinity}')
            guest.send_json({"type": "number", "number": 60})

            result = host.receive_json()
            assert result["numbers"] == [40, 60]
            assert result["winner"] == 1
            assert result["scores"] == [0, -1]


def test_binary_frames_do_not_end_the_game(client: TestClient) -> None:
    with client.websocket_connect("/ws") as host:
        code = create_game(host)
        with client.websocket_connect("/ws") as guest:
            join_game(host, guest, code)

            guest.send_bytes(b"\x00\xff")
            guest.send_bytes(b'{"type": "number", "number": 60}')
            host.send_json({"type": "number", "number": 40})

            result = host.receive_json()
            assert result["type"] == "result"
            assert result["numbers"] == [40, 60]
            assert client.get(f"/games/{code}").status_code == 200
