"""A single player's game: settings, ticker, engine, renderer and high score."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from fluppy_snake import engine
from fluppy_snake.config import GameConfig
from fluppy_snake.controls import to_direction
from fluppy_snake.engine import GameState
from fluppy_snake.highscore import HighScoreStore, MemoryHighScoreStore, record_score
from fluppy_snake.render import Frame, render
from fluppy_snake.scheduler import AsyncioTicker, Ticker
from fluppy_snake.settings import SettingField, Settings, Step
from fluppy_snake.snake import Position

logger = logging.getLogger(__name__)

TickerFactory = Callable[
    [Callable[[], None], Callable[[BaseException], None]], Ticker,
]


class SessionListener:
    """Receives events from a :class:`GameSession`. Override what you need."""

    def on_tick(self, frame: Frame) -> None:
        pass

    def on_score_change(self, score: int) -> None:
        pass

    def on_game_over(self, final_score: int, new_high_score: bool) -> None:
        pass

    def on_poison_hit(self, position: Position) -> None:
        pass

    def on_settings_changed(self, settings: Settings) -> None:
        pass


class GameSession:
    """Drives one game at a time for one player.

    The ticker calls :meth:`tick`; game over and restart always stop the
    ticker before touching the state.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        config: GameConfig | None = None,
        high_scores: HighScoreStore | None = None,
        rng: np.random.Generator | None = None,
        ticker_factory: TickerFactory = AsyncioTicker,
    ) -> None:
        self.settings = settings or Settings()
        self.config = config or GameConfig()
        self.high_scores = high_scores if high_scores is not None else MemoryHighScoreStore()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.state: GameState | None = None
        self.games_played = 0
        self._listeners: list[SessionListener] = []
        self._ticker = ticker_factory(self.tick, self._on_tick_error)

    # --- listeners ---

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str, *args) -> None:
        for listener in list(self._listeners):
            getattr(listener, event)(*args)

    # --- queries ---

    @property
    def status(self) -> str:
        if self.state is None:
            return "idle"
        return self.state.status.value

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.running

    @property
    def ticking(self) -> bool:
        """Whether the ticker is currently scheduled."""
        return self._ticker.running

    @property
    def score(self) -> int:
        return self.state.score if self.state is not None else 0

    @property
    def high_score(self) -> int:
        return self.high_scores.read()

    @property
    def tick_interval_ms(self) -> int | None:
        return self.state.tick_interval_ms if self.state is not None else None

    def frame(self) -> Frame | None:
        """Render the current state, if a game has been started."""
        return render(self.state) if self.state is not None else None

    # --- commands ---

    def start_game(self) -> None:
        """Begin a fresh game from the current settings."""
        self._ticker.stop()
        self.state = engine.new_game(self.settings, self.rng, self.config)
        self.games_played += 1
        self._emit("on_score_change", 0)
        self._emit("on_tick", render(self.state))
        self._ticker.start(self.state.tick_interval_ms)

    def restart_game(self) -> None:
        logger.info("Restarting after %d game(s).", self.games_played)
        self.start_game()

    def stop(self) -> None:
        """Halt the ticker without ending the game."""
        self._ticker.stop()

    async def aclose(self) -> None:
        await self._ticker.aclose()

    def set_direction(self, raw) -> bool:
        """Buffer directional input; ignored when no game is running."""
        if not self.running:
            return False
        direction = to_direction(raw)
        if direction is None:
            return False
        engine.set_direction(self.state, direction)
        return True

    def advance_setting(self, field: SettingField, step: Step = Step.NEXT) -> Settings:
        """Cycle a setting. Takes effect on the next started game."""
        self.settings.advance(field, step)
        self._emit("on_settings_changed", self.settings)
        return self.settings

    def tick(self) -> None:
        """Advance the running game by one step and publish the results."""
        state = self.state
        if state is None or not state.running:
            return

        previous_score = state.score
        outcome = engine.step(state)

        for pos in state.poison_hits:
            self._emit("on_poison_hit", pos)
        if state.score != previous_score:
            self._emit("on_score_change", state.score)

        if outcome.is_death:
            self._finish()
            return

        if state.tick_interval_ms != self._ticker.interval_ms:
            logger.info(
                "Tick interval %s -> %d ms at score %d.",
                self._ticker.interval_ms, state.tick_interval_ms, state.score,
            )
            self._ticker.start(state.tick_interval_ms)

        self._emit("on_tick", render(state))

    def _finish(self) -> None:
        self._ticker.stop()
        final = self.state.score
        try:
            new_high = record_score(self.high_scores, final)
        except OSError:
            logger.exception("Could not save high score %d.", final)
            new_high = False
        if new_high:
            logger.info("New high score: %d.", final)
        self._emit("on_game_over", final, new_high)

    def _on_tick_error(self, exc: BaseException) -> None:
        if self.state is not None and self.state.running:
            self.state.status = engine.GameStatus.GAME_OVER
            self._finish()

    def to_dict(self) -> dict:
        """Summary of the session for API responses."""
        frame = self.frame()
        return {
            "status": self.status,
            "score": self.score,
            "high_score": self.high_score,
            "tick_interval_ms": self.tick_interval_ms,
            "settings": self.settings.to_dict(),
            "frame": frame.to_dict() if frame is not None else None,
        }
