# IN THIS FILE: HEADINGS ON THE COST GRID
from enum import Enum
from typing import Tuple


class Direction(int, Enum):
    """
    Heading of a move on the grid.
    Uses even numbers, clockwise from UP, so a quarter turn is +/- 2 (mod 8).
    Rows grow downward, so UP decreases y.
    """
    UP = 0
    RIGHT = 2
    DOWN = 4
    LEFT = 6

    def __int__(self):
        return self.value

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit step (dx, dy) for this heading."""
        return _DELTAS[self]

    def clockwise(self) -> 'Direction':
        return Direction((self.value + 2) % 8)

    def counter_clockwise(self) -> 'Direction':
        return Direction((self.value + 6) % 8)

    def opposite(self) -> 'Direction':
        return Direction((self.value + 4) % 8)

    def is_perpendicular(self, other: 'Direction') -> bool:
        return (self.value - int(other)) % 4 == 2


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}
