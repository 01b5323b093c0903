"""In-memory registry of player sessions."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field

from fluppy_snake.config import GameConfig
from fluppy_snake.highscore import (
    FileHighScoreStore,
    HighScoreStore,
    MemoryHighScoreStore,
)
from fluppy_snake.scheduler import AsyncioTicker
from fluppy_snake.session import GameSession, TickerFactory
from fluppy_snake.settings import Settings

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class SessionEntry:
    """A registered session and its bookkeeping."""

    session_id: str
    session: GameSession
    created_at: float = field(default_factory=time.monotonic)
    connections: int = 0

    def summary(self) -> dict:
        d = self.session.to_dict()
        d.pop("frame")
        d["session_id"] = self.session_id
        return d


class GameManager:
    """Central registry managing all player sessions.

    Every session shares one high-score store.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
        ticker_factory: TickerFactory = AsyncioTicker,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.config = config or GameConfig()
        self.high_scores: HighScoreStore
        if self.config.high_score_path:
            self.high_scores = FileHighScoreStore(self.config.high_score_path)
        else:
            self.high_scores = MemoryHighScoreStore()
        self._sessions: dict[str, SessionEntry] = {}
        self._max_sessions = max_sessions
        self._ticker_factory = ticker_factory

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(self, settings: Settings | None = None) -> SessionEntry:
        """Register a new idle session and return its entry."""
        self._prune_idle_sessions()
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Too many active sessions. Try again later.")

        session_id = uuid.uuid4().hex[:12]
        entry = SessionEntry(
            session_id=session_id,
            session=GameSession(
                settings=settings,
                config=self.config,
                high_scores=self.high_scores,
                ticker_factory=self._ticker_factory,
            ),
        )
        self._sessions[session_id] = entry
        logger.info(
            "Session %s created (%s).",
            session_id, ", ".join(entry.session.settings.labels().values()),
        )
        return entry

    def get_session(self, session_id: str) -> SessionEntry:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise KeyError(f"Session {session_id} not found.")
        return entry

    def remove_session(self, session_id: str) -> None:
        entry = self._sessions.pop(session_id, None)
        if entry is not None:
            entry.session.stop()
            logger.info("Session %s removed.", session_id)

    def _prune_idle_sessions(self) -> None:
        """Drop the oldest sessions nobody is connected to.

        Sessions whose ticker is stopped go first; a game left ticking with
        no socket attached is stopped and dropped after them.
        """
        overflow = len(self._sessions) - self._max_sessions + 1
        if overflow <= 0:
            return
        idle = sorted(
            (e for e in self._sessions.values() if e.connections == 0),
            key=lambda e: (e.session.ticking, e.created_at),
        )
        for stale in idle[:overflow]:
            stale.session.stop()
            self._sessions.pop(stale.session_id, None)
        if idle:
            logger.info(
                "Pruned %d idle sessions (retaining up to %d).",
                min(overflow, len(idle)), self._max_sessions,
            )

    async def cleanup(self) -> None:
        """Stop every session's ticker and wait for the loops to exit."""
        await asyncio.gather(
            *(e.session.aclose() for e in self._sessions.values()),
            return_exceptions=True,
        )
        self._sessions.clear()
        logger.info("GameManager cleanup complete.")
