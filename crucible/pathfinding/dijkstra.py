# crucible/pathfinding/dijkstra.py

import heapq
from typing import Dict, List, Tuple

from loguru import logger

from crucible.entities.grid import CostGrid
from crucible.pathfinding.policy import MovementPolicy
from crucible.utils.enums import Direction
from crucible.utils.errors import NoSolutionError
from crucible.utils.types import DirectionalState


class SearchResult:
    def __init__(self, cost: int, end_state: DirectionalState, path: List[DirectionalState], expanded: int):
        self.cost = cost
        self.end_state = end_state
        self.path = path            # seed state first, end_state last
        self.expanded = expanded    # number of finalized states

    def __repr__(self) -> str:
        return f"SearchResult(cost={self.cost}, end={self.end_state}, steps={len(self.path) - 1})"


class CrucibleSearch:
    """
    Dijkstra over DirectionalStates of one CostGrid, constrained by one
    MovementPolicy. Single use: build a new instance per query.

    The walk starts with two seed states at the origin, heading RIGHT and
    DOWN with run 1, both at cost 0. Entering a cell costs that cell's value.

    With early_exit=False (default) the frontier is drained and the answer is
    the cheapest accepting state at the destination. With early_exit=True the
    search stops at the first accepting destination state popped; both give
    the same cost since all cell costs are non-negative.
    """

    def __init__(self, grid: CostGrid, policy: MovementPolicy, early_exit: bool = False):
        self.grid = grid
        self.policy = policy
        self.early_exit = early_exit

        self.distances: Dict[DirectionalState, int] = {}
        self.parents: Dict[DirectionalState, DirectionalState] = {}
        # finalized state -> its distance when it was popped
        self.visited: Dict[DirectionalState, int] = {}
        self.frontier: List[Tuple[int, int, DirectionalState]] = []  # (cost, seq, state)
        self.seq = 0

    def _push(self, cost: int, state: DirectionalState) -> None:
        self.seq += 1
        heapq.heappush(self.frontier, (cost, self.seq, state))

    def seeds(self) -> List[DirectionalState]:
        origin = self.grid.origin()
        return [
            DirectionalState(origin, Direction.RIGHT, 1),
            DirectionalState(origin, Direction.DOWN, 1),
        ]

    def get_neighbors(self, state: DirectionalState) -> List[Tuple[DirectionalState, int]]:
        """On-grid successor states of `state` with the cost of entering each."""
        neighbors = []
        for direction in self.policy.successors(state):
            next_state = state.advance(direction)
            cost = self.grid.cost(next_state.position)
            if cost is None:
                continue  # off the grid
            neighbors.append((next_state, cost))
        return neighbors

    def _is_goal(self, state: DirectionalState) -> bool:
        return state.position == self.grid.destination() and self.policy.accepts(state)

    def search(self) -> SearchResult:
        if self.visited or self.frontier:
            raise RuntimeError("CrucibleSearch instances are single use")

        logger.debug(
            f"Searching {self.grid.width}x{self.grid.height} grid with {self.policy.name} "
            f"(runs {self.policy.min_run}-{self.policy.max_run})"
        )

        for seed in self.seeds():
            self.distances[seed] = 0
            self._push(0, seed)

        while self.frontier:
            cost, _, current = heapq.heappop(self.frontier)
            if current in self.visited:
                continue  # stale duplicate
            self.visited[current] = cost

            if self.early_exit and self._is_goal(current):
                return self._finish(current)

            for next_state, step_cost in self.get_neighbors(current):
                if next_state in self.visited:
                    continue
                candidate = cost + step_cost
                if candidate < self.distances.get(next_state, float("inf")):
                    self.distances[next_state] = candidate
                    self.parents[next_state] = current
                    self._push(candidate, next_state)

        finishes = [s for s in self.distances if self._is_goal(s)]
        if not finishes:
            logger.warning(
                f"No accepting state at {self.grid.destination()} under {self.policy.name}, "
                f"expanded {len(self.visited)} states"
            )
            raise NoSolutionError(self.grid.destination(), self.policy)

        best = min(finishes, key=lambda s: (self.distances[s], s))
        return self._finish(best)

    def _finish(self, end: DirectionalState) -> SearchResult:
        cost = self.distances[end]
        logger.debug(f"Path found: cost={cost}, expanded={len(self.visited)} states")
        return SearchResult(cost, end, self._reconstruct_path(end), len(self.visited))

    def _reconstruct_path(self, state: DirectionalState) -> List[DirectionalState]:
        path = [state]
        while state in self.parents:
            state = self.parents[state]
            path.append(state)
        return path[::-1]


def solve(grid: CostGrid, policy: MovementPolicy, early_exit: bool = False) -> int:
    """Minimum cost from the top-left to the bottom-right cell under `policy`."""
    return CrucibleSearch(grid, policy, early_exit=early_exit).search().cost
