"""WebSocket handler streaming session events and accepting input."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from fluppy_snake.render import Frame
from fluppy_snake.server.game_manager import GameManager
from fluppy_snake.session import GameSession, SessionListener
from fluppy_snake.settings import Settings
from fluppy_snake.snake import Position

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


class QueueListener(SessionListener):
    """Turns session callbacks into JSON-ready events on an asyncio queue."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[dict] = asyncio.Queue()

    def on_tick(self, frame: Frame) -> None:
        self.queue.put_nowait({"type": "frame", "frame": frame.to_dict()})

    def on_score_change(self, score: int) -> None:
        self.queue.put_nowait({"type": "score", "score": score})

    def on_game_over(self, final_score: int, new_high_score: bool) -> None:
        self.queue.put_nowait({
            "type": "game_over",
            "score": final_score,
            "new_high_score": new_high_score,
        })

    def on_poison_hit(self, position: Position) -> None:
        self.queue.put_nowait({"type": "poison", "position": list(position)})

    def on_settings_changed(self, settings: Settings) -> None:
        self.queue.put_nowait({"type": "settings", "settings": settings.to_dict()})


async def _pump(websocket: WebSocket, queue: asyncio.Queue) -> None:
    """Forward queued events to the client until cancelled."""
    while True:
        event = await queue.get()
        if websocket.client_state != WebSocketState.CONNECTED:
            return
        await websocket.send_text(json.dumps(event, separators=(",", ":")))


def _handle_message(session: GameSession, msg: dict) -> None:
    action = msg.get("action")
    if action == "start":
        session.start_game()
    elif action == "restart" and session.state is not None:
        session.restart_game()

    direction = msg.get("direction")
    if isinstance(direction, str):
        session.set_direction(direction)

    swipe = msg.get("swipe")
    if (
        isinstance(swipe, list)
        and len(swipe) == 2
        and all(isinstance(v, (int, float)) for v in swipe)
    ):
        session.set_direction(tuple(swipe))


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send input, receive frames and game events."""
    manager = _get_manager(websocket)
    try:
        entry = manager.get_session(session_id)
    except KeyError:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session = entry.session
    listener = QueueListener()

    # Initial snapshot so the client can draw immediately.
    listener.on_settings_changed(session.settings)
    frame = session.frame()
    if frame is not None:
        listener.on_tick(frame)

    session.add_listener(listener)
    entry.connections += 1
    sender = asyncio.create_task(_pump(websocket, listener.queue))
    logger.info("Player connected to session %s.", session_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            _handle_message(session, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        session.remove_listener(listener)
        entry.connections -= 1
        if entry.connections == 0:
            session.stop()
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
