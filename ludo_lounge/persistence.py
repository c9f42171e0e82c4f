import json
import os
from typing import Optional

from loguru import logger

from .config import config
from .state import GameState


class JsonStateStore:
    """Keeps the latest game snapshot in a single JSON document."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or config.SAVE_PATH

    def load(self) -> Optional[GameState]:
        """Return the saved game, or None when nothing usable is on disk."""
        if not os.path.exists(self.path):
            return None
        # JSONDecodeError, UnicodeDecodeError and StateFormatError are ValueErrors
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return GameState.from_dict(data)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning(f"Discarding unreadable save at {self.path}: {e}")
            return None

    def save(self, state: GameState) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
