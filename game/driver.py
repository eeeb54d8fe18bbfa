"""
Game driver - runs the bot (or manual input) one tick at a time
Rendering, input mapping and frame pacing belong to whoever calls tick()
"""

from dataclasses import dataclass
from typing import Optional
import random

from algorithms.hamilton_cycle import build_cycle
from algorithms.shortcut_bot import decide_direction, greedy_direction
from .grid import Direction, GridTopology
from .simulation import SnakeSimulation, StepResult, new_game

MIN_GRID_SIZE = 4
STRATEGIES = ("shortcut", "greedy")


@dataclass
class GameConfig:
    grid_size: int = 10
    steps_per_tick: int = 1  # sub-steps per external update
    bot_enabled: bool = True
    strategy: str = "shortcut"
    seed: Optional[int] = None
    workers: int = 4

    def __post_init__(self):
        self.grid_size = clamp_grid_size(self.grid_size)
        self.steps_per_tick = max(1, int(self.steps_per_tick))
        self.workers = max(1, int(self.workers))
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {self.strategy!r} (expected one of {STRATEGIES})")


def clamp_grid_size(size: int) -> int:
    """At least 4; odd sizes round up since an odd cell count has no cycle."""
    size = max(MIN_GRID_SIZE, int(size))
    return size + (size % 2)


class GameDriver:
    def __init__(self, config: Optional[GameConfig] = None, verbose: bool = False):
        """
        Args:
            config: game settings (defaults to GameConfig())
            verbose: print cycle build progress and new high scores
        """
        self.config = config or GameConfig()
        self.verbose = verbose
        self.rng = random.Random(self.config.seed)
        self.highscore = 0
        self.running = True
        self.games_played = 0
        self.table = None
        self.sim: Optional[SnakeSimulation] = None
        self.last_result: Optional[StepResult] = None
        self.reset()

    @property
    def game_over(self) -> bool:
        return self.last_result in (StepResult.COLLIDE, StepResult.FINISHED)

    def reset(self, grid_size: Optional[int] = None) -> SnakeSimulation:
        """Start a new game; the cycle is rebuilt only if the grid size changed."""
        if grid_size is not None:
            self.config.grid_size = clamp_grid_size(grid_size)
        size = self.config.grid_size

        if self.table is None or self.table.grid.width != size:
            if self.verbose:
                print(f"Building Hamiltonian cycle for {size}x{size} grid...")
            self.table = build_cycle(size, rng=self.rng, workers=self.config.workers, verbose=self.verbose)

        self.sim = new_game(GridTopology.from_size(size), rng=self.rng)
        self.last_result = None
        self.games_played += 1
        return self.sim

    def set_direction(self, direction: Direction) -> None:
        """Manual override, e.g. from a key press mapped by the caller."""
        self.sim.set_direction(direction)

    def toggle_bot(self) -> bool:
        self.config.bot_enabled = not self.config.bot_enabled
        return self.config.bot_enabled

    def toggle_pause(self) -> bool:
        self.running = not self.running
        return self.running

    def set_steps_per_tick(self, steps: int) -> None:
        self.config.steps_per_tick = max(1, int(steps))

    def choose_direction(self) -> Direction:
        if self.config.strategy == "greedy":
            direction = greedy_direction(self.sim)
            return direction if direction is not None else self.sim.direction
        return decide_direction(self.sim, self.table)

    def tick(self) -> Optional[StepResult]:
        """
        Run one external update (steps_per_tick sub-steps).

        Returns:
            Result of the last sub-step, or None when paused or already over
        """
        if not self.running or self.game_over:
            return None

        result = None
        for _ in range(self.config.steps_per_tick):
            if self.config.bot_enabled:
                self.sim.set_direction(self.choose_direction())
            result = self.sim.step()
            self.last_result = result

            if len(self.sim.body) > self.highscore:
                self.highscore = len(self.sim.body)
                if self.verbose:
                    print(f"Highscore: {self.highscore}")

            if result is not StepResult.ADVANCE:
                break
        return result

    def run_until_over(self, max_steps: int = 1_000_000) -> StepResult:
        """Tick until the game ends or max_steps sub-steps have run."""
        steps = 0
        while not self.game_over and steps < max_steps:
            self.tick()
            steps += self.config.steps_per_tick
        return self.last_result
