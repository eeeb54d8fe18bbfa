"""Game module - Grid topology and the Snake simulation"""
from .grid import Cell, Direction, GridTopology
from .simulation import GameOverError, SnakeSimulation, StepResult, new_game, set_direction, step

__all__ = [
    'Cell', 'Direction', 'GridTopology',
    'GameOverError', 'SnakeSimulation', 'StepResult', 'new_game', 'set_direction', 'step',
]
