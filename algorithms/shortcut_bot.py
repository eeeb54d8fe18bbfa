"""
Per-tick direction choice for the Snake bot
- Default: follow the Hamiltonian cycle (always safe while the body lies on it)
- Shortcut: step onto a free neighbour that is closer to the target along the
  cycle, but only if following the cycle from there cannot run into the body
"""

from __future__ import annotations
from typing import Optional

from game.grid import Direction
from game.simulation import SnakeSimulation, StepResult
from .hamilton_cycle import DirectionTable
from .path_metrics import cycle_distance, free_run_length


def decide_direction(sim: SnakeSimulation, table: DirectionTable) -> Direction:
    """
    Pick the direction for the next step.

    Args:
        sim: current game (read only)
        table: cycle built for sim's grid

    Returns:
        The cycle's own direction, or a verified-safe shortcut
    """
    head = sim.head
    best_dir = table[head]
    if sim.target is None:
        return best_dir

    best = cycle_distance(table, head, sim.target)
    length = len(sim.body)
    grid = sim.grid
    # Free stretch of the cycle between the head and the tail
    runway = table.distance(head, sim.tail) or table.cycle_length

    for direction in Direction:
        neighbor = grid.neighbor(head, direction)
        if not grid.is_interior(neighbor) or neighbor in sim:
            continue
        if table.distance(head, neighbor) >= runway:
            continue
        # +1 for the move onto the neighbour itself
        score = cycle_distance(table, neighbor, sim.target) + 1
        if direction is Direction.RIGHT:
            improves = score <= best
        else:
            improves = score < best
        if not improves:
            continue
        if free_run_length(table, neighbor, sim.body, sim.target, length) < length:
            continue
        best = score
        best_dir = direction

    return best_dir


def greedy_direction(sim: SnakeSimulation) -> Optional[Direction]:
    """
    Head straight for the target: try directions by Manhattan distance to it
    and return the first one whose move succeeds on a copy of the game.
    Returns None when every move is fatal.
    """
    if sim.target is None:
        return None
    head = sim.head
    tx, ty = sim.target

    def manhattan(direction):
        x, y = sim.grid.neighbor(head, direction)
        return abs(x - tx) + abs(y - ty)

    for direction in sorted(Direction, key=manhattan):
        neighbor = sim.grid.neighbor(head, direction)
        if not sim.grid.is_interior(neighbor) or neighbor in sim:
            continue
        trial = sim.copy()
        if trial.step(direction) is StepResult.ADVANCE:
            return direction
    return None
