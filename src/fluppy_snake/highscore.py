"""Persistence for the single best score."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class HighScoreStore(Protocol):
    """Reads and writes the single persisted best score."""

    def read(self) -> int: ...

    def write(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Process-local high score; forgotten on exit."""

    def __init__(self, initial: int = 0) -> None:
        self._value = max(0, initial)

    def read(self) -> int:
        return self._value

    def write(self, score: int) -> None:
        self._value = score


class FileHighScoreStore:
    """High score kept in a small JSON file.

    Any read failure (missing file, bad JSON, wrong type) is treated as 0.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> int:
        try:
            raw = json.loads(self.path.read_text())
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable high score file %s: %s", self.path, exc)
            return 0

        value = raw.get("high_score") if isinstance(raw, dict) else raw
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("Ignoring invalid high score %r in %s.", value, self.path)
            return 0
        return value

    def write(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": score}))
        logger.info("High score %d saved to %s", score, self.path)


def record_score(store: HighScoreStore, final_score: int) -> bool:
    """Write *final_score* if it beats the stored value.

    Returns True when a new high score was recorded.
    """
    if final_score > store.read():
        store.write(final_score)
        return True
    return False
