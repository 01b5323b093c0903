"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from fluppy_snake.config import GameConfig
from fluppy_snake.server.game_manager import GameManager
from fluppy_snake.server.routes import router
from fluppy_snake.server.websocket import ws_router


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.game_manager = GameManager(config)
        yield
        await app.state.game_manager.cleanup()

    app = FastAPI(
        title="Fluppy Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
