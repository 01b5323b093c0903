"""REST API route handlers for session and settings management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from fluppy_snake.render import rasterize
from fluppy_snake.server.game_manager import GameManager, SessionEntry
from fluppy_snake.server.models import (
    AdvanceSettingRequest,
    CreateSessionRequest,
    HighScoreResponse,
    SessionSummary,
)
from fluppy_snake.settings import Settings

router = APIRouter(tags=["sessions"])


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


def _get_entry(request: Request, session_id: str) -> SessionEntry:
    try:
        return _get_manager(request).get_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create an idle single-player session."""
    settings = Settings.from_dict(body.model_dump(exclude_none=True))
    try:
        entry = _get_manager(request).create_session(settings)
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    return SessionSummary(**entry.summary())


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Full session snapshot including the current frame."""
    entry = _get_entry(request, session_id)
    result = entry.session.to_dict()
    result["session_id"] = entry.session_id
    return result


@router.get("/sessions/{session_id}/grid")
async def get_grid(session_id: str, request: Request) -> dict:
    """Cell-code raster of the current game, indexed `cells[y][x]`."""
    entry = _get_entry(request, session_id)
    state = entry.session.state
    if state is None:
        raise HTTPException(status_code=409, detail="No game started.")
    return {
        "cols": state.cols,
        "rows": state.rows,
        "cells": rasterize(state).tolist(),
    }


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> None:
    _get_entry(request, session_id)
    _get_manager(request).remove_session(session_id)


@router.post("/sessions/{session_id}/settings")
async def advance_setting(
    session_id: str, body: AdvanceSettingRequest, request: Request,
) -> SessionSummary:
    """Cycle one setting forward or backward."""
    entry = _get_entry(request, session_id)
    entry.session.advance_setting(body.field, body.direction)
    return SessionSummary(**entry.summary())


@router.post("/sessions/{session_id}/start")
async def start_game(session_id: str, request: Request) -> SessionSummary:
    entry = _get_entry(request, session_id)
    entry.session.start_game()
    return SessionSummary(**entry.summary())


@router.post("/sessions/{session_id}/restart")
async def restart_game(session_id: str, request: Request) -> SessionSummary:
    entry = _get_entry(request, session_id)
    if entry.session.state is None:
        raise HTTPException(status_code=409, detail="No game to restart.")
    entry.session.restart_game()
    return SessionSummary(**entry.summary())


@router.get("/high-score")
async def high_score(request: Request) -> HighScoreResponse:
    return HighScoreResponse(high_score=_get_manager(request).high_scores.read())
