"""Algorithms module - Hamiltonian cycle construction and the shortcut bot"""
from .hamilton_cycle import CycleBuilder, DirectionTable, build_cycle, visualize_cycle
from .path_metrics import cycle_distance, free_run_length
from .shortcut_bot import decide_direction, greedy_direction

__all__ = [
    'CycleBuilder', 'DirectionTable', 'build_cycle', 'visualize_cycle',
    'cycle_distance', 'free_run_length',
    'decide_direction', 'greedy_direction',
]
