"""
Snake simulation state
- Owns the body (deque, head at the front), the target and the current direction
- step() is the only operation that mutates body and target
- The target respawns uniformly at random on a free interior cell
"""

from __future__ import annotations
import random
from collections import deque
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from .grid import Cell, Direction, GridTopology


class StepResult(Enum):
    ADVANCE = "advance"
    COLLIDE = "collide"
    FINISHED = "finished"  # board full (or empty): nothing left to do


class GameOverError(RuntimeError):
    """Raised when stepping a simulation that has already collided."""


class SnakeSimulation:
    def __init__(
        self,
        grid: GridTopology,
        body: Optional[Iterable[Cell]] = None,
        target: Optional[Cell] = None,
        direction: Direction = Direction.UP,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            grid: board bounds
            body: cells from head to tail. Defaults to a single cell at grid.origin
            target: target cell. If None, one is drawn from the free cells
            direction: direction used by the next step
            rng: random source for target respawns (seed it for reproducible games)
        """
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.direction = Direction(direction)

        cells = [tuple(c) for c in body] if body is not None else [grid.origin]
        if not cells:
            raise ValueError("Snake body must contain at least one cell")
        for cell in cells:
            if not grid.is_interior(cell):
                raise ValueError(f"Body cell {cell} is not an interior cell of {grid}")
        if len(set(cells)) != len(cells):
            raise ValueError("Snake body contains duplicate cells")

        self.body = deque(cells)
        self._occupied = set(cells)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.steps = 0

        if target is not None:
            target = tuple(target)
            if not grid.is_interior(target) or target in self._occupied:
                raise ValueError(f"Target {target} must be a free interior cell")
            self.target: Optional[Cell] = target
        elif len(self.body) < grid.capacity:
            self.target = self._random_free_cell()
        else:
            self.target = None

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def score(self) -> int:
        return max(0, len(self.body) - 1)

    @property
    def is_full(self) -> bool:
        return len(self.body) == self.grid.capacity

    def __contains__(self, cell) -> bool:
        return tuple(cell) in self._occupied

    def __len__(self) -> int:
        return len(self.body)

    def set_direction(self, direction: Direction) -> None:
        self.direction = Direction(direction)

    def _random_free_cell(self, exclude: Optional[Cell] = None) -> Cell:
        # Rejection sampling; callers guarantee at least one free cell exists
        g = self.grid
        while True:
            cell = (
                self.rng.randint(g.min_x + 1, g.max_x - 2),
                self.rng.randint(g.min_y + 1, g.max_y - 2),
            )
            if cell not in self._occupied and cell != exclude:
                return cell

    def step(self, direction: Optional[Direction] = None) -> StepResult:
        """
        Advance the snake one cell.

        Args:
            direction: if given, becomes the current direction before moving

        Returns:
            ADVANCE on a normal move, COLLIDE on hitting a wall or the body,
            FINISHED when the board is already full (or the body is empty)
        """
        if not self.alive:
            raise GameOverError("Simulation has collided; start a new game")
        if direction is not None:
            self.direction = Direction(direction)

        if not self.body or len(self.body) == self.grid.capacity:
            return StepResult.FINISHED

        new_head = self.grid.neighbor(self.body[0], self.direction)

        if new_head == self.target:
            # Tail stays, so the snake grows by one
            if len(self.body) + 1 >= self.grid.capacity:
                self.target = None
            else:
                self.target = self._random_free_cell(exclude=new_head)
        else:
            tail = self.body.pop()
            self._occupied.discard(tail)

        if not self.grid.is_interior(new_head):
            self.alive = False
            self.death_reason = "wall"
            return StepResult.COLLIDE
        if new_head in self._occupied:
            self.alive = False
            self.death_reason = "self"
            return StepResult.COLLIDE

        self.body.appendleft(new_head)
        self._occupied.add(new_head)
        self.steps += 1
        return StepResult.ADVANCE

    def copy(self) -> "SnakeSimulation":
        """Independent copy, including a cloned random state, for trial moves."""
        rng = random.Random()
        rng.setstate(self.rng.getstate())
        clone = SnakeSimulation.__new__(SnakeSimulation)
        clone.grid = self.grid
        clone.rng = rng
        clone.direction = self.direction
        clone.body = deque(self.body)
        clone._occupied = set(self._occupied)
        clone.alive = self.alive
        clone.death_reason = self.death_reason
        clone.steps = self.steps
        clone.target = self.target
        return clone

    def __repr__(self):
        return (f"SnakeSimulation(length={len(self.body)}, head={self.head if self.body else None}, "
                f"target={self.target}, alive={self.alive})")


def new_game(
    bounds: Union[GridTopology, Tuple[int, int, int, int]],
    rng: Optional[random.Random] = None,
) -> SnakeSimulation:
    """Single-cell snake at the grid origin with the target one cell down-right of it."""
    grid = bounds if isinstance(bounds, GridTopology) else GridTopology(*bounds)
    ox, oy = grid.origin
    target = (ox + 1, oy + 1)
    if not grid.is_interior(target):
        target = None
    return SnakeSimulation(grid, body=[grid.origin], target=target, rng=rng)


def step(sim: SnakeSimulation, direction: Optional[Direction] = None) -> StepResult:
    return sim.step(direction)


def set_direction(sim: SnakeSimulation, direction: Direction) -> None:
    sim.set_direction(direction)
