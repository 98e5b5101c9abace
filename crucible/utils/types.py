# IN THIS FILE: COORDINATE, DIRECTIONALSTATE

from crucible.utils.enums import Direction


class Coordinate:
    """
    A grid cell, x = column and y = row.
    Ordered row-major (by y, then x) so iteration over cells is deterministic.
    """

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def step(self, direction: Direction) -> 'Coordinate':
        """Neighbouring cell one move away in `direction`. May lie off the grid."""
        dx, dy = direction.delta
        return Coordinate(self.x + dx, self.y + dy)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return False
        return self.x == other.x and self.y == other.y

    def __lt__(self, other: 'Coordinate') -> bool:
        return (self.y, self.x) < (other.y, other.x)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"Coordinate(x={self.x}, y={self.y})"


class DirectionalState:
    """
    Search node: "at `position`, having just moved `run` consecutive steps
    heading `direction`".

    The same cell reached with a different heading or run length is a
    different node.
    """

    def __init__(self, position: Coordinate, direction: Direction, run: int = 1):
        if run < 1:
            raise ValueError(f"run must be at least 1, got {run}")
        self.position = position
        self.direction = direction
        self.run = run

    def advance(self, direction: Direction) -> 'DirectionalState':
        """
        State after one more move heading `direction`.
        Going straight extends the run, a quarter turn restarts it at 1.
        Reversing is never a legal move.
        """
        if direction == self.direction:
            return DirectionalState(self.position.step(direction), direction, self.run + 1)
        if direction == self.direction.opposite():
            raise ValueError(f"cannot reverse from {self.direction.name} to {direction.name}")
        return DirectionalState(self.position.step(direction), direction, 1)

    def _key(self):
        return (self.position.y, self.position.x, int(self.direction), self.run)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectionalState):
            return False
        return self._key() == other._key()

    def __lt__(self, other: 'DirectionalState') -> bool:
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def get_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "x": self.position.x,
            "y": self.position.y,
            "d": int(self.direction),
            "r": self.run,
        }

    def __repr__(self) -> str:
        return (f"DirectionalState(x={self.position.x}, y={self.position.y}, "
                f"d={self.direction.name}, r={self.run})")
