"""
Watch the Hamiltonian shortcut bot play Snake (headless)
The snake follows a pre-computed cycle that visits every cell exactly once and
cuts across it whenever the shortcut is provably safe, so it should fill the
whole board every game.
"""

import time
from game.driver import GameConfig, GameDriver
from game.simulation import StepResult


def run_bot_games(
    num_games=5,
    grid_size=10,
    steps_per_tick=1,
    strategy="shortcut",
    seed=None,
    workers=4,
    max_steps=1_000_000,
    verbose=True,
):
    """
    Play several games with the bot and report scores

    Args:
        num_games: Number of games to play
        grid_size: Interior side length of the board
        steps_per_tick: Sub-steps per driver tick
        strategy: "shortcut" (cycle + shortcuts) or "greedy"
        seed: Random seed for the cycle and apple positions
        workers: Parallel search tasks used while building the cycle
        max_steps: Safety limit on moves per game
        verbose: Print per-game lines and a summary

    Returns:
        list of dicts with score, steps, result and seconds for each game
    """
    config = GameConfig(
        grid_size=grid_size,
        steps_per_tick=steps_per_tick,
        bot_enabled=True,
        strategy=strategy,
        seed=seed,
        workers=workers,
    )

    start = time.time()
    driver = GameDriver(config, verbose=False)
    build_seconds = time.time() - start
    capacity = driver.sim.grid.capacity

    if verbose:
        print("\n" + "="*60)
        print("Hamiltonian Shortcut Bot")
        print("="*60)
        print(f"Number of games: {num_games}")
        print(f"Grid: {config.grid_size}x{config.grid_size} ({capacity} cells) | Strategy: {strategy}")
        print(f"Cycle built in {build_seconds:.2f}s")
        print("="*60 + "\n")

    results = []
    for game in range(num_games):
        if game > 0:
            driver.reset()
        game_start = time.time()
        steps = 0

        while not driver.game_over:
            driver.tick()
            steps += config.steps_per_tick

            # Safety check: prevent infinite loops
            if steps > max_steps:
                if verbose:
                    print(f"WARNING: Game exceeded {max_steps} steps. Ending game.")
                break

        sim = driver.sim
        outcome = driver.last_result
        results.append({
            'score': sim.score,
            'length': len(sim.body),
            'steps': sim.steps,
            'result': outcome.value if outcome is not None else 'stopped',
            'seconds': time.time() - game_start,
        })

        if verbose:
            status = "FULL BOARD" if outcome is StepResult.FINISHED else (sim.death_reason or "stopped")
            print(f"Game {game + 1}/{num_games} finished | Length: {len(sim.body)}/{capacity} "
                  f"| Steps: {sim.steps} | {status}")

    if verbose and results:
        lengths = [r['length'] for r in results]
        print("\n" + "="*60)
        print("Bot Run Complete!")
        print("="*60)
        print(f"Games Played: {num_games}")
        print(f"Average Length: {sum(lengths)/len(lengths):.1f}")
        print(f"Best Length: {max(lengths)}")
        print(f"Worst Length: {min(lengths)}")
        print(f"Perfect Games (100% fill): {sum(1 for l in lengths if l == capacity)}")
        print(f"Average Steps: {sum(r['steps'] for r in results)/len(results):.0f}")
        print("="*60 + "\n")

    return results


if __name__ == "__main__":
    run_bot_games(num_games=3, grid_size=10, seed=None)
