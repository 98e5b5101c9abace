# crucible/pathfinding/policy.py

from typing import Dict, List, Optional

from crucible.utils.consts import (
    CRUCIBLE_MIN_RUN,
    CRUCIBLE_MAX_RUN,
    ULTRA_MIN_RUN,
    ULTRA_MAX_RUN,
)
from crucible.utils.enums import Direction
from crucible.utils.types import DirectionalState


class MovementPolicy:
    """
    Straight-run limits for one search.

    A state may continue straight while its run is below `max_run`, and may
    turn a quarter left or right once its run has reached `min_run`. A finish
    counts only when the final run is at least `min_run`.
    """

    def __init__(self, min_run: int, max_run: int, name: Optional[str] = None):
        if min_run < 1:
            raise ValueError(f"min_run must be at least 1, got {min_run}")
        if max_run < min_run:
            raise ValueError(f"max_run ({max_run}) must not be below min_run ({min_run})")
        self.min_run = min_run
        self.max_run = max_run
        self.name = name or f"custom({min_run}-{max_run})"

    def successors(self, state: DirectionalState) -> List[Direction]:
        """Headings `state` may move in next: straight first, then clockwise, then counter-clockwise."""
        result = []
        if state.run < self.max_run:
            result.append(state.direction)
        if state.run >= self.min_run:
            result.append(state.direction.clockwise())
            result.append(state.direction.counter_clockwise())
        return result

    def accepts(self, state: DirectionalState) -> bool:
        return state.run >= self.min_run

    def get_dict(self) -> dict:
        return {"name": self.name, "min_run": self.min_run, "max_run": self.max_run}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MovementPolicy):
            return False
        return self.min_run == other.min_run and self.max_run == other.max_run

    def __hash__(self) -> int:
        return hash((self.min_run, self.max_run))

    def __repr__(self) -> str:
        return f"MovementPolicy(name={self.name!r}, min_run={self.min_run}, max_run={self.max_run})"


CRUCIBLE = MovementPolicy(CRUCIBLE_MIN_RUN, CRUCIBLE_MAX_RUN, "crucible")
ULTRA_CRUCIBLE = MovementPolicy(ULTRA_MIN_RUN, ULTRA_MAX_RUN, "ultra_crucible")

POLICIES: List[MovementPolicy] = [CRUCIBLE, ULTRA_CRUCIBLE]

_ALIASES: Dict[str, MovementPolicy] = {
    "crucible": CRUCIBLE,
    "lenient": CRUCIBLE,
    "ultra": ULTRA_CRUCIBLE,
    "ultra_crucible": ULTRA_CRUCIBLE,
    "strict": ULTRA_CRUCIBLE,
}


def get_policy(name: str) -> MovementPolicy:
    """Look up a preset by name ("crucible", "ultra crucible", "ultra-crucible", ...)."""
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return _ALIASES[key]
    except KeyError:
        raise ValueError(f"unknown policy {name!r}, expected one of {sorted(_ALIASES)}") from None
