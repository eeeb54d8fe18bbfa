"""
Hamiltonian Cycle for Snake using randomized local search
- Creates a predetermined loop that visits every interior cell exactly once
- Starts from a back-and-forth (boustrophedon) tour, which is valid but rigid
- Repeatedly rewires 4 nearby cells at random and keeps the change only if the
  whole tour still closes, giving a different organic pattern on every build
- Candidate searches run on a thread pool; commits are applied by one thread
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import random

import numpy as np

from game.grid import Cell, DIRS, Direction, GridTopology

MIN_CYCLE_SIZE = 4

# Offsets from one 2x2 block to a second nearby block
_BLOCK_OFFSETS = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (1, -1), (-1, 1), (-1, -1),
    (2, 0), (-2, 0), (0, 2), (0, -2),
)

# Diagonal pairs inside a 2x2 block, relative to its top-left corner
_DIAGONALS = (
    ((0, 0), (1, 1)),
    ((1, 0), (0, 1)),
)

_DELTAS = tuple(DIRS[d] for d in Direction)
_ALTERNATIVES = tuple(tuple(int(a) for a in d.alternatives) for d in Direction)

Candidate = Tuple[Tuple[int, int], ...]  # ((flat_index, new_direction), ...)


def boustrophedon_directions(width: int, height: int) -> np.ndarray:
    """
    Base tour as a [height, width] array of directions.

    Row 0 is the return lane (runs LEFT back to the origin). Even columns run
    DOWN to the last row, odd columns run UP to row 1; the last column runs up
    into row 0.
    """
    if width % 2:
        raise ValueError(f"Interior width must be even to form a cycle (got {width})")
    if width < 2 or height < 2:
        raise ValueError(f"Grid {width}x{height} is too small for a cycle")

    directions = np.zeros((height, width), dtype=np.int8)
    for y in range(height):
        for x in range(width):
            if y == 0 and x > 0:
                d = Direction.LEFT
            elif x % 2 == 0:
                d = Direction.RIGHT if y == height - 1 else Direction.DOWN
            else:
                d = Direction.RIGHT if (y == 1 and x < width - 1) else Direction.UP
            directions[y, x] = d
    return directions


def replay_cycle(cells: Sequence[int], width: int, height: int) -> bool:
    """
    Follow a flat direction table from (0, 0) and check it is one closed tour.

    Fails as soon as the walk leaves the grid or revisits a cell.
    """
    total = width * height
    seen = np.zeros(total, dtype=bool)
    x = y = 0
    for _ in range(total):
        idx = y * width + x
        if seen[idx]:
            return False
        seen[idx] = True
        dx, dy = _DELTAS[cells[idx]]
        x += dx
        y += dy
        if x < 0 or x >= width or y < 0 or y >= height:
            return False
    return x == 0 and y == 0


def _propose(rng: random.Random, cells: Sequence[int], width: int, height: int) -> Optional[Candidate]:
    """Random 4-cell rewiring, or None if it fails the cheap checks."""
    bx, by = rng.randrange(width - 1), rng.randrange(height - 1)
    ox, oy = rng.choice(_BLOCK_OFFSETS)
    cx, cy = bx + ox, by + oy
    if cx < 0 or cx >= width - 1 or cy < 0 or cy >= height - 1:
        return None

    picked: List[int] = []
    for (sx, sy) in ((bx, by), (cx, cy)):
        for (px, py) in rng.choice(_DIAGONALS):
            picked.append((sy + py) * width + (sx + px))
    if len(set(picked)) != 4:
        return None

    old_targets = []
    new_targets = []
    changes = []
    for idx in picked:
        x, y = idx % width, idx // width
        old = cells[idx]
        new = rng.choice(_ALTERNATIVES[old])
        dx, dy = _DELTAS[old]
        old_targets.append((y + dy) * width + (x + dx))
        nx, ny = x + _DELTAS[new][0], y + _DELTAS[new][1]
        if nx < 0 or nx >= width or ny < 0 or ny >= height:
            return None
        new_targets.append(ny * width + nx)
        if new != old:
            changes.append((idx, new))

    # Every cell must still be entered exactly once
    if not changes or sorted(old_targets) != sorted(new_targets):
        return None
    return tuple(changes)


def _search(snapshot: Sequence[int], width: int, height: int, budget: int, seed: int) -> Optional[Candidate]:
    """Worker task: try up to `budget` candidates against a read-only snapshot."""
    rng = random.Random(seed)
    for _ in range(budget):
        candidate = _propose(rng, snapshot, width, height)
        if candidate is None:
            continue
        patched = list(snapshot)
        for idx, new in candidate:
            patched[idx] = new
        if replay_cycle(patched, width, height):
            return candidate
    return None


class DirectionTable:
    """
    Read-only cell -> Direction lookup forming a single Hamiltonian cycle.

    Cells are interior cells of `grid` (absolute coordinates). The position of
    every cell along the tour, starting at grid.origin, is precomputed so tour
    distances are O(1).
    """

    def __init__(self, grid: GridTopology, directions: np.ndarray):
        directions = np.array(directions, dtype=np.int8)
        if directions.shape != (grid.height, grid.width):
            raise ValueError(
                f"Direction array shape {directions.shape} does not match "
                f"{grid.width}x{grid.height} interior")
        if not replay_cycle(directions.ravel().tolist(), grid.width, grid.height):
            raise ValueError("Directions do not form a single closed tour")
        directions.setflags(write=False)
        self.grid = grid
        self.directions = directions
        self.cycle_length = grid.capacity

        # cell -> order along the tour, and the reverse mapping
        self.cycle: Dict[Cell, int] = {}
        self.order_to_pos: List[Cell] = []
        cell = grid.origin
        for order in range(self.cycle_length):
            self.cycle[cell] = order
            self.order_to_pos.append(cell)
            cell = grid.neighbor(cell, self[cell])

        self.path_map = np.zeros((grid.height, grid.width), dtype=int)
        for (x, y), order in self.cycle.items():
            lx, ly = grid.to_local((x, y))
            self.path_map[ly, lx] = order
        self.path_map.setflags(write=False)

    def __getitem__(self, cell: Cell) -> Direction:
        lx, ly = self.grid.to_local(cell)
        if not (0 <= lx < self.grid.width and 0 <= ly < self.grid.height):
            raise KeyError(cell)
        return Direction(int(self.directions[ly, lx]))

    def __contains__(self, cell) -> bool:
        return tuple(cell) in self.cycle

    def __len__(self) -> int:
        return self.cycle_length

    def next_cell(self, cell: Cell) -> Cell:
        return self.order_to_pos[(self.cycle[cell] + 1) % self.cycle_length]

    def position(self, cell: Cell) -> int:
        return self.cycle[cell]

    def cell_at(self, order: int) -> Cell:
        return self.order_to_pos[order % self.cycle_length]

    def distance(self, a: Cell, b: Cell) -> int:
        """Steps needed to get from a to b following the cycle."""
        return (self.cycle[b] - self.cycle[a]) % self.cycle_length

    def tour(self) -> List[Cell]:
        return list(self.order_to_pos)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.order_to_pos)


class CycleBuilder:
    def __init__(
        self,
        grid: GridTopology,
        rng: Optional[random.Random] = None,
        workers: Optional[int] = None,
        candidates_per_task: int = 256,
        verbose: bool = False,
    ):
        """
        Args:
            grid: board whose interior the cycle covers (interior width must be even)
            rng: random source; seed it for a reproducible cycle
            workers: number of parallel search tasks per iteration (default 4)
            candidates_per_task: proposals each task tries before giving up
            verbose: print progress lines
        """
        if grid.width < MIN_CYCLE_SIZE or grid.height < MIN_CYCLE_SIZE:
            raise ValueError(f"Cycle needs at least a {MIN_CYCLE_SIZE}x{MIN_CYCLE_SIZE} interior (got {grid.width}x{grid.height})")
        if grid.width % 2:
            raise ValueError(f"Interior width must be even to form a cycle (got {grid.width})")
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.workers = max(1, workers or 4)
        self.candidates_per_task = max(1, candidates_per_task)
        self.verbose = verbose
        self.rounds = 0

    def build(self) -> DirectionTable:
        width, height = self.grid.width, self.grid.height
        directions = boustrophedon_directions(width, height)
        iterations = width * height
        self.rounds = 0

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            for iteration in range(iterations):
                candidate = None
                while candidate is None:
                    self.rounds += 1
                    snapshot = directions.ravel().tolist()
                    task = partial(_search, snapshot, width, height, self.candidates_per_task)
                    seeds = [self.rng.getrandbits(64) for _ in range(self.workers)]
                    # executor.map keeps submission order, so the winner is reproducible
                    for result in executor.map(task, seeds):
                        if result is not None:
                            candidate = result
                            break

                for idx, new in candidate:
                    directions[idx // width, idx % width] = new

                if self.verbose and (iteration + 1) % max(1, iterations // 10) == 0:
                    print(f"  cycle search: {iteration + 1}/{iterations} rewirings ({self.rounds} rounds)")

        if self.verbose:
            print(f"Hamiltonian cycle ready: {width}x{height} grid, {self.rounds} search rounds")
        return DirectionTable(self.grid, directions)


def build_cycle(
    size: int,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
) -> DirectionTable:
    """
    Build a randomized Hamiltonian cycle over a size x size interior.

    Args:
        size: interior side length (even, at least 4)
        rng: random source. Takes precedence over seed
        seed: seed for a fresh random source when rng is not given
        workers: parallel search tasks per iteration
        verbose: print progress
    """
    if rng is None:
        rng = random.Random(seed)
    return CycleBuilder(GridTopology.from_size(size), rng=rng, workers=workers, verbose=verbose).build()


_ARROWS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}


def visualize_cycle(grid_size: int = 10, seed: Optional[int] = None, table: Optional[DirectionTable] = None):
    """Display the Hamiltonian cycle in the console."""
    if table is None:
        table = build_cycle(grid_size, seed=seed)
    grid = table.grid
    total_cells = table.cycle_length

    # Walk the table and check it comes back to the origin
    cell = grid.origin
    visited = set()
    for _ in range(total_cells):
        visited.add(cell)
        cell = grid.neighbor(cell, table[cell])
    closed = cell == grid.origin and len(visited) == total_cells

    print("\n" + "="*60)
    print(f"Hamiltonian Cycle for {grid.width}x{grid.height} Grid")
    print("="*60)
    print("Numbers show the order in which cells are visited:")
    print()

    cell_width = len(str(total_cells - 1)) + 1

    print("    ", end="")
    for x in range(grid.width):
        print(f"x{x}".ljust(cell_width), end=" ")
    print()

    for y in range(grid.height):
        print(f"y{y}  ".ljust(4), end="")
        for x in range(grid.width):
            print(str(table.path_map[y, x]).ljust(cell_width), end=" ")
        print()

    print("\nDirections:")
    for y in range(grid.height):
        row = "".join(_ARROWS[table[grid.from_local((x, y))]] for x in range(grid.width))
        print("    " + row)

    last = table.cell_at(total_cells - 1)
    print(f"\nPosition 0 at {grid.origin}, Position {total_cells - 1} at {last}")
    print(f"Closed: {closed} {'✓' if closed else '✗ NOT A VALID CYCLE!'}")
    print("="*60)
    return closed


if __name__ == "__main__":
    visualize_cycle(10)
