"""Snake movement, growth, collision, and food placement on a fixed grid."""

from __future__ import annotations

import enum
import logging
import random

from backend.config import GRID_HEIGHT, GRID_WIDTH, INITIAL_SNAKE_LENGTH
from backend.models.grid import Direction, Position
from backend.models.snake import Snake

logger = logging.getLogger(__name__)


class TickResult(enum.Enum):
    MOVED = "moved"
    ATE = "ate"
    COLLIDED = "collided"


class SnakeSimulation:
    """Owns the snake, the food cell, and the obstacle set for one board.

    Randomness comes only from *rng*, so a seeded ``random.Random`` makes
    food placement reproducible.
    """

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        obstacles: frozenset[Position] = frozenset(),
        rng: random.Random | None = None,
    ) -> None:
        if width < 1 or height // 2 + INITIAL_SNAKE_LENGTH > height:
            raise ValueError(
                f"A {width}x{height} grid cannot hold the starting snake."
            )
        self.width = width
        self.height = height
        self.obstacles = frozenset(obstacles)
        self.rng = rng if rng is not None else random.Random()
        self.snake = Snake()
        self.food = Position(0, 0)
        self.initialize()

    # -- setup ----------------------------------------------------------------

    def initialize(self) -> None:
        """Reset to a 3-cell vertical snake in the middle, facing up."""
        center = Position(self.width // 2, self.height // 2)
        self.snake = Snake.vertical(center, INITIAL_SNAKE_LENGTH)

    def place_food(self) -> Position:
        """Move the food to a random free cell.

        If the board has no free cell the food stays where it is.
        """
        occupied = set(self.snake.segments) | self.obstacles
        empty = [
            Position(x, y)
            for x in range(self.width)
            for y in range(self.height)
            if (x, y) not in occupied
        ]
        if not empty:
            logger.debug("No free cell for food; leaving it at %s", self.food)
            return self.food
        self.food = self.rng.choice(empty)
        return self.food

    # -- movement -------------------------------------------------------------

    def steer(self, direction: Direction) -> bool:
        return self.snake.steer(direction)

    def step(self, direction: Direction) -> Position:
        """Push a new head one cell toward *direction*; the tail stays."""
        new_head = self.snake.head.moved(direction)
        self.snake.segments.appendleft(new_head)
        return new_head

    def check_collision(self) -> bool:
        """True if the head is off the grid, on the body, or on an obstacle."""
        head = self.snake.head
        if not head.in_bounds(self.width, self.height):
            return True
        if head in self.snake.body:
            return True
        return head in self.obstacles

    def tick(self) -> TickResult:
        """Advance one logical step.

        The buffered turn is committed first.  Collision is checked
        before the tail is removed, so running into the cell the tail is
        about to vacate still counts.
        """
        direction = self.snake.commit_direction()
        self.step(direction)

        if self.check_collision():
            return TickResult.COLLIDED

        if self.snake.head == self.food:
            self.place_food()
            return TickResult.ATE

        self.snake.segments.pop()
        return TickResult.MOVED
