"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from fluppy_snake.server.app import create_app
from fluppy_snake.server.game_manager import GameManager


@pytest.fixture()
def tc():
    """Starlette sync TestClient for REST calls and WebSocket sessions."""
    application = create_app()
    application.state.game_manager = GameManager()
    return TestClient(application)


def _create_session(tc, **body) -> str:
    resp = tc.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


def _receive_until(ws, kind, limit=100):
    """Read events until one of type *kind* arrives; return all read."""
    events = []
    for _ in range(limit):
        event = json.loads(ws.receive_text())
        events.append(event)
        if event["type"] == kind:
            return events
    raise AssertionError(f"No {kind!r} event within {limit} messages.")


class TestPlayWebSocket:
    def test_initial_settings_event(self, tc):
        sid = _create_session(tc, mode=3)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            event = json.loads(ws.receive_text())
            assert event["type"] == "settings"
            assert event["settings"]["labels"]["mode"] == "ZEN"

    def test_unknown_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass

    def test_game_runs_to_game_over(self, tc):
        # 10x10 box at EXTREME speed: the snake reaches the wall quickly.
        sid = _create_session(tc, size=0, difficulty=3)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            _receive_until(ws, "settings")
            ws.send_text(json.dumps({"action": "start"}))
            events = _receive_until(ws, "game_over")

        frames = [e for e in events if e["type"] == "frame"]
        assert len(frames) >= 2
        assert frames[0]["frame"]["tick"] == 0
        assert events[-1]["new_high_score"] is (events[-1]["score"] > 0)

    def test_malformed_messages_ignored(self, tc):
        sid = _create_session(tc, size=0, difficulty=3)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            _receive_until(ws, "settings")
            ws.send_text("not json")
            ws.send_text(json.dumps([1, 2]))
            ws.send_text(json.dumps({"direction": 5, "swipe": "x"}))
            ws.send_text(json.dumps({"action": "start"}))
            events = _receive_until(ws, "frame")
            assert events[-1]["frame"]["cols"] == 10

    def test_direction_input_turns_snake(self, tc):
        sid = _create_session(tc, size=0, mode=3, difficulty=0)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            _receive_until(ws, "settings")
            ws.send_text(json.dumps({"action": "start"}))
            _receive_until(ws, "frame")
            ws.send_text(json.dumps({"direction": "ArrowUp"}))
            frame = _receive_until(ws, "frame")[-1]["frame"]
            head = next(c for c in frame["cells"] if c["layer"] == "head")
            assert (head["x"], head["y"]) == (5, 4)
