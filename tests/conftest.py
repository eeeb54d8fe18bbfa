"""Shared fixtures for the Snake bot tests."""

import pytest

from algorithms.hamilton_cycle import DirectionTable, boustrophedon_directions, build_cycle
from game.grid import GridTopology


@pytest.fixture(scope="session")
def grid4():
    return GridTopology.from_size(4)


@pytest.fixture(scope="session")
def base_table4(grid4):
    """Unshuffled back-and-forth tour on a 4x4 board.

    Tour order from the origin:
    (0,0) (0,1) (0,2) (0,3) (1,3) (1,2) (1,1) (2,1)
    (2,2) (2,3) (3,3) (3,2) (3,1) (3,0) (2,0) (1,0)
    """
    return DirectionTable(grid4, boustrophedon_directions(4, 4))


@pytest.fixture(scope="session")
def table6():
    return build_cycle(6, seed=1234, workers=2)
