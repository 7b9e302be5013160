"""Game-wide constants and on-disk file layout."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# -- grid ---------------------------------------------------------------------

GRID_WIDTH = 30
GRID_HEIGHT = 20
INITIAL_SNAKE_LENGTH = 3

# -- scoring ------------------------------------------------------------------

FOOD_SCORE = 10
MAX_OBSTACLES = 100
MAX_LEADERBOARD_ENTRIES = 10

# -- menu ---------------------------------------------------------------------

MENU_ITEMS: tuple[str, ...] = ("Start Game", "Leaderboard", "Settings", "Exit")

DEFAULT_PLAYER_NAME = "Player"


# -- persistence --------------------------------------------------------------


@dataclass(frozen=True)
class StorePaths:
    """Locations of the four flat-text stores inside a data directory."""

    obstacles: Path
    user_scores: Path
    leaderboard: Path
    settings: Path

    @classmethod
    def in_dir(cls, data_dir: Path) -> StorePaths:
        return cls(
            obstacles=data_dir / "obstacles.txt",
            user_scores=data_dir / "user_scores.txt",
            leaderboard=data_dir / "scores.txt",
            settings=data_dir / "settings.txt",
        )
