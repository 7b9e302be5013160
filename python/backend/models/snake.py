"""Snake body model."""

from __future__ import annotations

import itertools
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field

from backend.models.grid import Direction, Position


@dataclass
class Snake:
    """An ordered body of grid cells, head first.

    ``next_direction`` is the turn buffered from input; it only becomes
    ``direction`` when the simulation commits it at the start of a tick.
    """

    segments: deque[Position] = field(default_factory=deque)
    direction: Direction = Direction.UP
    next_direction: Direction = Direction.UP

    # -- construction helpers -------------------------------------------------

    @classmethod
    def vertical(cls, head: Position, length: int) -> Snake:
        """Build a straight snake hanging down from *head*, facing up."""
        if length < 1:
            raise ValueError(f"Snake length must be at least 1, got {length}.")
        body = deque(Position(head.x, head.y + i) for i in range(length))
        return cls(segments=body)

    # -- queries --------------------------------------------------------------

    @property
    def head(self) -> Position:
        return self.segments[0]

    @property
    def body(self) -> Iterator[Position]:
        """Every segment except the head."""
        return itertools.islice(self.segments, 1, None)

    def __len__(self) -> int:
        return len(self.segments)

    # -- steering -------------------------------------------------------------

    def steer(self, direction: Direction) -> bool:
        """Buffer *direction* unless it reverses the current heading.

        Returns True if the turn was accepted.
        """
        if direction == self.direction.opposite:
            return False
        self.next_direction = direction
        return True

    def commit_direction(self) -> Direction:
        self.direction = self.next_direction
        return self.direction
