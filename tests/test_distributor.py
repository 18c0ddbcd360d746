# tests/test_distributor.py
import random
from fractions import Fraction

import pytest

import constants as const
from distributor import CircularDistributor, Distributor
from grid_core import CircleCoordinate, CircularGrid, MazeInvariantError


@pytest.fixture
def grid():
    return CircularGrid(1, 4, 0)


def test_distributor_is_abstract():
    with pytest.raises(TypeError):
        Distributor()


def test_grid_hands_out_fresh_distributors(grid):
    first = grid.distributor(random.Random(0))
    second = grid.distributor(random.Random(0))
    assert isinstance(first, CircularDistributor)
    first.take_free()
    assert first.claimed_count() == 1
    assert second.claimed_count() == 0


def test_take_from_outer_circle_then_consume(grid):
    dist = grid.distributor(random.Random(3))
    seed, state = dist.take_from_outer_circle()
    assert seed.ring == 1
    assert state == const.CELL_FREE
    assert dist.claimed_count() == 1

    dist.consume_outer_circle()
    assert dist.claimed_count() == 8
    assert all(dist.is_claimed(c) for c in grid.coords_on_ring(1))

    probe, state = dist.take_from_outer_circle()
    assert probe.ring == 1
    assert state == const.CELL_TAKEN
    assert dist.claimed_count() == 8


def test_take_free_drains_every_coordinate_once(grid):
    dist = grid.distributor(random.Random(7))
    taken = []
    while True:
        coord = dist.take_free()
        if coord is None:
            break
        taken.append(coord)
        assert dist.claimed_count() + dist.free_count() == grid.size()
    assert sorted(taken) == list(grid.get_all_coords())
    assert dist.take_free() is None


def test_take_neighbour_claims_monotonically(grid):
    dist = grid.distributor(random.Random(0))
    origin = CircleCoordinate(0, Fraction(0))
    assert dist.take_neighbour(origin, const.DIR_OUT) == (
        CircleCoordinate(1, Fraction(0)),
        const.CELL_FREE,
    )
    assert dist.take_neighbour(origin, const.DIR_OUT) == (
        CircleCoordinate(1, Fraction(0)),
        const.CELL_TAKEN,
    )
    assert dist.take_neighbour(origin, const.DIR_IN) is None
    # origin itself was never claimed by looking at its neighbours
    assert not dist.is_claimed(origin)


def test_every_take_reports_taken_afterwards(grid):
    dist = grid.distributor(random.Random(1))
    dist.take_from_outer_circle()
    dist.consume_outer_circle()
    while dist.take_free() is not None:
        pass
    for coord in grid.get_all_coords():
        for direction in const.ALL_DIRECTIONS:
            result = dist.take_neighbour(coord, direction)
            if result is not None:
                assert result[1] == const.CELL_TAKEN


def test_take_neighbour_off_grid(grid):
    dist = grid.distributor(random.Random(0))
    with pytest.raises(MazeInvariantError):
        dist.take_neighbour(CircleCoordinate(0, Fraction(1, 3)), const.DIR_CW)


def test_scripted_selection_is_deterministic(grid):
    class FirstChoice:
        def randrange(self, n):
            return 0

    dist = grid.distributor(FirstChoice())
    assert dist.take_from_outer_circle() == (CircleCoordinate(1, Fraction(0)), const.CELL_FREE)
    assert dist.take_free() == CircleCoordinate(0, Fraction(0))


def test_take_neighbour_on_single_position_ring():
    grid = CircularGrid(3, 1, 0.9)
    dist = grid.distributor(random.Random(0))
    lone = CircleCoordinate(2, Fraction(0))
    assert dist.take_neighbour(lone, const.DIR_CW) is None
    assert dist.take_neighbour(lone, const.DIR_CCW) is None
    assert not dist.is_claimed(lone)
    assert dist.claimed_count() == 0
