"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fluppy_snake.settings import SettingField, Step


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions. Omitted fields keep their defaults."""

    theme: int | None = Field(default=None, ge=0)
    mode: int | None = Field(default=None, ge=0)
    map: int | None = Field(default=None, ge=0)
    difficulty: int | None = Field(default=None, ge=0)
    size: int | None = Field(default=None, ge=0)


class AdvanceSettingRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/settings."""

    field: SettingField
    direction: Step = Step.NEXT


class SettingsView(BaseModel):
    indices: dict[str, int]
    labels: dict[str, str]


class SessionSummary(BaseModel):
    """Compact session info returned by most endpoints."""

    session_id: str
    status: str
    score: int
    high_score: int
    tick_interval_ms: int | None
    settings: SettingsView


class HighScoreResponse(BaseModel):
    high_score: int
