import pytest

from crucible.entities.grid import CostGrid
from crucible.pathfinding.dijkstra import CrucibleSearch, solve
from crucible.pathfinding.policy import CRUCIBLE, POLICIES, ULTRA_CRUCIBLE, MovementPolicy
from crucible.utils.consts import REFERENCE_CRUCIBLE_COST, REFERENCE_GRID, REFERENCE_ULTRA_COST
from crucible.utils.enums import Direction
from crucible.utils.errors import NoSolutionError
from crucible.utils.types import Coordinate


@pytest.fixture
def reference():
    return CostGrid.from_text(REFERENCE_GRID)


# -----------------------------------------------------------------------------
# Known answers
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("early_exit", [False, True])
def test_reference_lenient(reference, early_exit):
    assert solve(reference, CRUCIBLE, early_exit=early_exit) == REFERENCE_CRUCIBLE_COST == 102


@pytest.mark.parametrize("early_exit", [False, True])
def test_reference_strict(reference, early_exit):
    assert solve(reference, ULTRA_CRUCIBLE, early_exit=early_exit) == REFERENCE_ULTRA_COST == 94


def test_small_grid_prefers_cheap_cells():
    # down then right costs 1 + 1, right then down costs 9 + 1
    assert solve(CostGrid.from_text("19\n11"), CRUCIBLE) == 2


def test_zero_cost_grid():
    assert solve(CostGrid.from_text("000\n000\n000"), CRUCIBLE) == 0


def test_strict_row_corridor_sums_row():
    grid = CostGrid.from_text("1234567")
    result = CrucibleSearch(grid, ULTRA_CRUCIBLE).search()
    assert result.cost == 2 + 3 + 4 + 5 + 6 + 7
    assert all(s.direction == Direction.RIGHT for s in result.path)
    assert [s.run for s in result.path] == [1, 2, 3, 4, 5, 6, 7]


def test_strict_column_corridor():
    assert solve(CostGrid.from_text("1\n2\n3\n4\n5"), ULTRA_CRUCIBLE) == 14


def test_single_cell_grid():
    grid = CostGrid.from_text("5")
    assert solve(grid, CRUCIBLE) == 0
    assert solve(grid, MovementPolicy(1, 1)) == 0
    with pytest.raises(NoSolutionError):
        solve(grid, ULTRA_CRUCIBLE)


# -----------------------------------------------------------------------------
# Unsolvable grids
# -----------------------------------------------------------------------------

def test_corridor_shorter_than_min_run():
    with pytest.raises(NoSolutionError) as err:
        solve(CostGrid.from_text("123"), ULTRA_CRUCIBLE)
    assert err.value.destination == Coordinate(2, 0)
    assert err.value.policy is ULTRA_CRUCIBLE


def test_corridor_longer_than_max_run():
    with pytest.raises(NoSolutionError):
        solve(CostGrid.from_text("1" * 12), ULTRA_CRUCIBLE)


@pytest.mark.parametrize("early_exit", [False, True])
def test_unsolvable_in_both_modes(early_exit):
    with pytest.raises(NoSolutionError):
        solve(CostGrid.from_text("12\n34"), ULTRA_CRUCIBLE, early_exit=early_exit)


# -----------------------------------------------------------------------------
# Invariants
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("policy", POLICIES)
def test_settled_distances_never_change(reference, policy):
    search = CrucibleSearch(reference, policy)
    search.search()
    assert search.visited
    for s, cost in search.visited.items():
        assert search.distances[s] == cost


@pytest.mark.parametrize("policy", POLICIES)
def test_runs_stay_within_max(reference, policy):
    search = CrucibleSearch(reference, policy)
    search.search()
    assert max(s.run for s in search.distances) <= policy.max_run


@pytest.mark.parametrize("policy", POLICIES)
def test_transitions_follow_policy(reference, policy):
    search = CrucibleSearch(reference, policy)
    search.search()
    for child, parent in search.parents.items():
        assert child.direction != parent.direction.opposite()
        if child.direction == parent.direction:
            assert child.run == parent.run + 1
        else:
            assert child.direction.is_perpendicular(parent.direction)
            assert child.run == 1
            assert parent.run >= policy.min_run


@pytest.mark.parametrize("policy", POLICIES)
def test_path_adds_up(reference, policy):
    result = CrucibleSearch(reference, policy).search()
    path = result.path
    assert path[0].position == reference.origin()
    assert path[-1].position == reference.destination()
    assert policy.accepts(path[-1])
    for prev, cur in zip(path, path[1:]):
        assert prev.position.step(cur.direction) == cur.position
    assert sum(reference.cost(s.position) for s in path[1:]) == result.cost


def test_repeatable(reference):
    first = CrucibleSearch(reference, ULTRA_CRUCIBLE).search()
    second = CrucibleSearch(reference, ULTRA_CRUCIBLE).search()
    assert first.cost == second.cost
    assert first.end_state == second.end_state
    assert first.path == second.path


def test_early_exit_expands_no_more(reference):
    full = CrucibleSearch(reference, CRUCIBLE).search()
    early = CrucibleSearch(reference, CRUCIBLE, early_exit=True).search()
    assert early.cost == full.cost
    assert early.expanded <= full.expanded


def test_tighter_max_run_never_cheaper(reference):
    lenient = [solve(reference, MovementPolicy(1, m)) for m in range(6, 0, -1)]
    assert lenient == sorted(lenient)
    strict = [solve(reference, MovementPolicy(4, m)) for m in range(10, 6, -1)]
    assert strict == sorted(strict)
    assert all(c >= 0 for c in lenient + strict)


def test_search_is_single_use(reference):
    search = CrucibleSearch(reference, CRUCIBLE)
    search.search()
    with pytest.raises(RuntimeError):
        search.search()


@pytest.mark.parametrize("policy", POLICIES)
def test_every_generated_state_within_limits(reference, policy):
    search = CrucibleSearch(reference, policy)
    search.search()
    seeds = set(search.seeds())
    for s in search.distances:
        assert s.position in reference
        assert 1 <= s.run <= policy.max_run
        if s not in seeds:
            assert search.parents[s].direction != s.direction.opposite()
    for s in search.visited:
        assert s in search.distances
