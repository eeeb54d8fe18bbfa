"""
Tests for game/simulation.py - movement, growth, collisions and respawns.
"""

import random

import pytest

from game.grid import Direction, GridTopology
from game.simulation import (
    GameOverError,
    SnakeSimulation,
    StepResult,
    new_game,
    set_direction,
    step,
)


@pytest.fixture
def grid6():
    return GridTopology.from_size(6)


class TestNewGame:
    """Tests for new_game."""

    def test_single_cell_body_at_origin(self):
        """The snake starts as one cell at the origin, target one cell diagonally away."""
        sim = new_game((-1, -1, 7, 7), rng=random.Random(0))
        assert list(sim.body) == [(0, 0)]
        assert sim.target == (1, 1)
        assert sim.direction is Direction.UP
        assert sim.alive

    def test_accepts_topology(self):
        """Bounds may be given as a GridTopology."""
        grid = GridTopology(-22, -22, 22, 22)
        sim = new_game(grid)
        assert sim.head == (-21, -21)
        assert sim.target == (-20, -20)

    def test_first_cycle_step(self, table6):
        """Following the cycle from (0,0) never lands on (1,1): length stays 1."""
        sim = new_game(table6.grid, rng=random.Random(0))
        direction = table6[(0, 0)]
        assert direction in (Direction.DOWN, Direction.RIGHT)
        assert sim.step(direction) is StepResult.ADVANCE
        assert len(sim.body) == 1
        assert sim.head == table6.grid.neighbor((0, 0), direction)
        assert sim.target == (1, 1)


class TestConstruction:
    """Tests for SnakeSimulation argument checks."""

    def test_duplicate_cells_rejected(self, grid6):
        with pytest.raises(ValueError):
            SnakeSimulation(grid6, body=[(0, 0), (0, 1), (0, 0)])

    def test_body_outside_interior_rejected(self, grid6):
        with pytest.raises(ValueError):
            SnakeSimulation(grid6, body=[(0, 0), (-1, 0)])

    def test_empty_body_rejected(self, grid6):
        with pytest.raises(ValueError):
            SnakeSimulation(grid6, body=[])

    def test_target_on_body_rejected(self, grid6):
        with pytest.raises(ValueError):
            SnakeSimulation(grid6, body=[(0, 0), (1, 0)], target=(1, 0))

    def test_random_target_is_free(self, grid6):
        """Without an explicit target one is drawn from the free cells."""
        body = [(x, 0) for x in range(6)]
        sim = SnakeSimulation(grid6, body=body, rng=random.Random(3))
        assert sim.target is not None
        assert grid6.is_interior(sim.target)
        assert sim.target not in sim

    def test_full_board_has_no_target(self):
        """A body covering the board leaves no room for a target."""
        grid = GridTopology.from_size(4)
        body = []
        for y in range(4):
            xs = range(4) if y % 2 == 0 else range(3, -1, -1)
            body.extend((x, y) for x in xs)
        sim = SnakeSimulation(grid, body=body)
        assert sim.target is None
        assert sim.is_full


class TestStep:
    """Tests for SnakeSimulation.step."""

    def test_plain_move_keeps_length(self, grid6):
        """Moving onto an empty cell drops the tail."""
        sim = SnakeSimulation(grid6, body=[(2, 2), (2, 3), (2, 4)], target=(5, 5))
        assert sim.step(Direction.UP) is StepResult.ADVANCE
        assert list(sim.body) == [(2, 1), (2, 2), (2, 3)]
        assert (2, 4) not in sim
        assert sim.target == (5, 5)

    def test_eating_grows_and_respawns(self, grid6):
        """Landing on the target keeps the tail and draws a new free target."""
        sim = SnakeSimulation(grid6, body=[(0, 0)], target=(1, 0), rng=random.Random(1))
        assert sim.step(Direction.RIGHT) is StepResult.ADVANCE
        assert list(sim.body) == [(1, 0), (0, 0)]
        assert sim.target not in sim
        assert grid6.is_interior(sim.target)
        assert sim.score == 1

    def test_wall_collision(self, grid6):
        """Walking into the wall ring collides."""
        sim = SnakeSimulation(grid6, body=[(0, 0)], target=(3, 3))
        assert sim.step(Direction.UP) is StepResult.COLLIDE
        assert not sim.alive
        assert sim.death_reason == "wall"

    def test_self_collision(self, grid6):
        """Walking into the body (not the tail) collides."""
        body = [(1, 1), (1, 2), (0, 2), (0, 1), (0, 0)]
        sim = SnakeSimulation(grid6, body=body, target=(3, 3))
        assert sim.step(Direction.LEFT) is StepResult.COLLIDE
        assert sim.death_reason == "self"

    def test_chasing_the_tail_is_allowed(self, grid6):
        """The tail moves away on the same step, so its cell is free."""
        body = [(0, 0), (1, 0), (1, 1), (0, 1)]
        sim = SnakeSimulation(grid6, body=body, target=(3, 3))
        assert sim.step(Direction.DOWN) is StepResult.ADVANCE
        assert list(sim.body) == [(0, 1), (0, 0), (1, 0), (1, 1)]

    def test_step_after_collision_raises(self, grid6):
        """A collided game must be replaced, not stepped."""
        sim = SnakeSimulation(grid6, body=[(0, 0)], target=(3, 3))
        sim.step(Direction.LEFT)
        with pytest.raises(GameOverError):
            sim.step(Direction.RIGHT)

    def test_uses_current_direction(self, grid6):
        """Without an argument step() uses the stored direction."""
        sim = SnakeSimulation(grid6, body=[(2, 2)], target=(5, 5))
        set_direction(sim, Direction.RIGHT)
        assert step(sim) is StepResult.ADVANCE
        assert sim.head == (3, 2)

    def test_last_free_cell_then_finished(self, base_table4):
        """Eating on the last free cell fills the board; the next step is terminal, not a collision."""
        tour = base_table4.tour()
        body = list(reversed(tour[:15]))  # head at T14, free cell T15
        sim = SnakeSimulation(base_table4.grid, body=body, target=tour[15])
        assert sim.step(Direction.LEFT) is StepResult.ADVANCE
        assert sim.is_full
        assert sim.target is None
        assert sim.step(base_table4[sim.head]) is StepResult.FINISHED
        assert sim.alive
        assert len(sim.body) == 16


class TestRespawn:
    """Tests for target respawn."""

    def test_same_seed_same_targets(self, grid6):
        """Respawns are reproducible with a seeded generator."""
        a = SnakeSimulation(grid6, body=[(0, 0)], target=(1, 0), rng=random.Random(42))
        b = SnakeSimulation(grid6, body=[(0, 0)], target=(1, 0), rng=random.Random(42))
        a.step(Direction.RIGHT)
        b.step(Direction.RIGHT)
        assert a.target == b.target

    def test_copy_is_independent(self, grid6):
        """Stepping a copy leaves the original untouched but mirrors its random draws."""
        sim = SnakeSimulation(grid6, body=[(0, 0)], target=(1, 0), rng=random.Random(5))
        clone = sim.copy()
        clone.step(Direction.RIGHT)
        assert list(sim.body) == [(0, 0)]
        assert sim.target == (1, 0)
        sim.step(Direction.RIGHT)
        assert sim.target == clone.target

    def test_growth_invariant_over_a_cycle_run(self, table6):
        """Following the cycle: growth by exactly one on eating, no duplicates, target always free."""
        sim = new_game(table6.grid, rng=random.Random(11))
        for _ in range(2000):
            before = len(sim.body)
            ate = table6.grid.neighbor(sim.head, table6[sim.head]) == sim.target
            result = sim.step(table6[sim.head])
            if result is StepResult.FINISHED:
                break
            assert result is StepResult.ADVANCE
            assert len(sim.body) == before + (1 if ate else 0)
            assert len(set(sim.body)) == len(sim.body)
            if sim.target is not None:
                assert sim.target not in sim
