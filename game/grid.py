"""
Grid topology for the Snake board
- Bounds are (min_x, min_y, max_x, max_y) with a one-cell wall ring on the outside
- Only interior cells may hold the snake or the target
- Directions use screen orientation: y grows downward
"""

from __future__ import annotations
from enum import IntEnum
from typing import Iterator, Tuple

Cell = Tuple[int, int]


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def alternatives(self) -> Tuple["Direction", ...]:
        """The three directions a cell may switch to (anything but a U-turn)."""
        return _ALTERNATIVES[self]


DIRS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_ALTERNATIVES = {
    Direction.UP: (Direction.UP, Direction.LEFT, Direction.RIGHT),
    Direction.DOWN: (Direction.DOWN, Direction.LEFT, Direction.RIGHT),
    Direction.LEFT: (Direction.UP, Direction.DOWN, Direction.LEFT),
    Direction.RIGHT: (Direction.UP, Direction.DOWN, Direction.RIGHT),
}


class GridTopology:
    def __init__(self, min_x: int, min_y: int, max_x: int, max_y: int):
        """
        Args:
            min_x, min_y: first wall column / row
            max_x, max_y: one past the last wall column / row
        """
        if max_x - min_x - 2 <= 0 or max_y - min_y - 2 <= 0:
            raise ValueError(f"Bounds {(min_x, min_y, max_x, max_y)} leave no interior cells")
        self.min_x = min_x
        self.min_y = min_y
        self.max_x = max_x
        self.max_y = max_y

    @classmethod
    def from_size(cls, size: int) -> "GridTopology":
        """Square grid whose interior runs 0..size-1 on both axes."""
        return cls(-1, -1, size + 1, size + 1)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x - 2

    @property
    def height(self) -> int:
        return self.max_y - self.min_y - 2

    @property
    def capacity(self) -> int:
        return self.width * self.height

    @property
    def origin(self) -> Cell:
        """Top-left interior cell; the snake starts here and the cycle is rooted here."""
        return (self.min_x + 1, self.min_y + 1)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    def is_wall(self, cell: Cell) -> bool:
        x, y = cell
        return self.in_bounds(cell) and (
            x == self.min_x or x == self.max_x - 1 or y == self.min_y or y == self.max_y - 1
        )

    def is_interior(self, cell: Cell) -> bool:
        x, y = cell
        return self.min_x < x < self.max_x - 1 and self.min_y < y < self.max_y - 1

    def neighbor(self, cell: Cell, direction: Direction) -> Cell:
        dx, dy = DIRS[direction]
        return (cell[0] + dx, cell[1] + dy)

    def interior_cells(self) -> Iterator[Cell]:
        for y in range(self.min_y + 1, self.max_y - 1):
            for x in range(self.min_x + 1, self.max_x - 1):
                yield (x, y)

    def to_local(self, cell: Cell) -> Cell:
        """Interior cell -> zero-based (x, y) used for array indexing."""
        return (cell[0] - self.min_x - 1, cell[1] - self.min_y - 1)

    def from_local(self, local: Cell) -> Cell:
        return (local[0] + self.min_x + 1, local[1] + self.min_y + 1)

    def __eq__(self, other):
        return isinstance(other, GridTopology) and self.bounds == other.bounds

    def __hash__(self):
        return hash(self.bounds)

    def __repr__(self):
        return f"GridTopology{self.bounds}"
