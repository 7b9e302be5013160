"""Abstract player intents and the top-level UI states they drive."""

from __future__ import annotations

from enum import StrEnum

from backend.models.grid import Direction


class AppState(StrEnum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    LEADERBOARD = "leaderboard"
    SETTINGS = "settings"


class Intent(StrEnum):
    """What the player asked for, independent of any input device."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    PAUSE = "pause"
    BACK = "back"
    RESTART = "restart"
    LEADERBOARD = "leaderboard"

    @property
    def direction(self) -> Direction | None:
        """The movement direction this intent carries, if any."""
        try:
            return Direction(self.value)
        except ValueError:
            return None
