"""
Path metrics along the Hamiltonian cycle
- cycle_distance: how far the target is if the snake just follows the cycle
- free_run_length: how far the snake can follow the cycle before hitting itself

Both are pure functions of (table, body, target); nothing is mutated.
"""

from __future__ import annotations
from typing import Optional, Sequence

from game.grid import Cell
from .hamilton_cycle import DirectionTable


def cycle_distance(table: DirectionTable, cell: Cell, target: Cell) -> int:
    """Number of cycle-following steps from `cell` to `target` (0 if equal)."""
    return table.distance(cell, target)


def free_run_length(
    table: DirectionTable,
    cell: Cell,
    body: Sequence[Cell],
    target: Optional[Cell],
    cap: int,
) -> int:
    """
    Count collision-free steps when following the cycle from `cell`.

    `cell` is where the head will be after the next move. Every move drops
    one tail cell unless the head eats the target, so after `s` further steps
    only body[:len(body) - 1 - s + eaten] is still in place. Landing on one of
    those cells ends the run.

    Args:
        table: the cycle
        cell: starting cell (the head's next position)
        body: snake body, head first
        target: current target, or None when the board is saturated
        cap: stop counting after this many steps

    Returns:
        Steps walked without collision; `cap` (or the steps walked before
        coming back to `cell`) if the run is clear.
    """
    index = {c: j for j, c in enumerate(body)}
    length = len(body)
    eaten = 1 if cell == target else 0

    steps = 0
    current = cell
    while steps < cap:
        current = table.next_cell(current)
        steps += 1
        if current == cell:
            break
        if current == target:
            eaten += 1
        j = index.get(current)
        if j is not None and j < length - 1 - steps + eaten:
            return steps - 1
    return steps
