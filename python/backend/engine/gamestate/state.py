"""Tracks the mutable state of a play session and its render snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field

from backend.config import FOOD_SCORE
from backend.engine.difficulty import difficulty_level, speed_interval
from backend.models.grid import Position
from backend.models.highscore import ScoreEntry
from backend.models.intent import AppState


class GameSession:
    """Holds the score and frame timers for one play-through."""

    def __init__(self, best_at_start: int = 0, global_at_start: int = 0) -> None:
        self.score: int = 0
        self.best_at_start = best_at_start
        self.global_at_start = global_at_start
        self.move_timer: float = 0.0
        self.animation_timer: float = 0.0

    # -- scoring --------------------------------------------------------------

    def add_food(self) -> int:
        self.score += FOOD_SCORE
        return self.score

    @property
    def new_personal_best(self) -> bool:
        return self.score > max(0, self.best_at_start)

    @property
    def new_global_best(self) -> bool:
        return self.score > max(0, self.global_at_start)

    @property
    def speed_interval(self) -> float:
        return speed_interval(self.score)

    @property
    def difficulty_level(self) -> int:
        return difficulty_level(self.score)

    # -- time tracking --------------------------------------------------------

    def advance(self, dt: float) -> bool:
        """Accumulate *dt*; return True and restart the timer once a tick is due."""
        self.move_timer += dt
        if self.move_timer >= self.speed_interval:
            self.move_timer = 0.0
            return True
        return False


@dataclass(frozen=True)
class Snapshot:
    """Everything a frontend needs to draw one frame."""

    state: AppState
    player: str
    menu_index: int
    show_grid: bool
    snake: tuple[Position, ...]
    food: Position
    obstacles: frozenset[Position]
    score: int
    personal_best: int
    global_best: int
    difficulty_level: int
    animation_timer: float
    leaderboard: tuple[ScoreEntry, ...] = field(default_factory=tuple)
    new_personal_best: bool = False
    new_global_best: bool = False
