"""
Hamiltonian Snake Bot - Main Entry Point
Run this file to watch the bot play or inspect the generated cycle
"""

import sys
import os


def clear_screen():
    """Clear the terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_banner():
    """Print the game banner"""
    print("\n" + "="*60)
    print("  🐍  HAMILTONIAN SNAKE BOT  🐍")
    print("="*60)


def print_menu():
    """Print the main menu"""
    print("\nChoose an option:")
    print("  1. 🤖 Watch the shortcut bot play")
    print("  2. 🧭 Watch the greedy bot play")
    print("  3. 🗺️  Show a generated Hamiltonian cycle")
    print("  4. 🚪 Exit")
    print()


def get_config(mode_name, show_speed=True):
    """
    Get configuration from user for a specific mode

    Args:
        mode_name: Name of the mode (for display)
        show_speed: Whether to ask for sub-steps per tick

    Returns:
        dict: Configuration dictionary with keys: grid_size, steps_per_tick, seed
    """
    from game.driver import clamp_grid_size

    print("\n" + "="*60)
    print(f"Configuration for {mode_name}")
    print("="*60)
    print("Press Enter to use default values shown in [brackets]\n")

    config = {}

    try:
        grid_size = input("Grid size [10]: ").strip()
        config['grid_size'] = clamp_grid_size(int(grid_size) if grid_size else 10)
    except ValueError:
        print("Invalid input. Using default 10x10 grid.")
        config['grid_size'] = 10

    if show_speed:
        try:
            steps_input = input("Moves per tick [1]: ").strip()
            config['steps_per_tick'] = max(1, int(steps_input)) if steps_input else 1
        except ValueError:
            print("Invalid input. Using 1 move per tick.")
            config['steps_per_tick'] = 1
    else:
        config['steps_per_tick'] = 1

    seed_input = input("Random seed (blank for random) []: ").strip()
    try:
        config['seed'] = int(seed_input) if seed_input else None
    except ValueError:
        print("Invalid seed. Using a random one.")
        config['seed'] = None

    print("\n" + "="*60)
    print("Configuration Summary:")
    print("="*60)
    print(f"  Grid Size: {config['grid_size']}x{config['grid_size']}")
    if show_speed:
        print(f"  Moves per tick: {config['steps_per_tick']}")
    print(f"  Seed: {config['seed'] if config['seed'] is not None else 'random'}")
    print("="*60 + "\n")

    return config


def watch_bot(strategy):
    """Run headless bot games and print the results"""
    config = get_config(f"{strategy.title()} Bot", show_speed=True)

    try:
        num_games = int(input("\nNumber of games to play [3]: ").strip() or "3")
    except ValueError:
        num_games = 3

    try:
        from demos.hamilton_demo import run_bot_games
        run_bot_games(
            num_games=num_games,
            grid_size=config['grid_size'],
            steps_per_tick=config['steps_per_tick'],
            strategy=strategy,
            seed=config['seed'],
        )
    except ImportError as e:
        print(f"❌ Error: Could not import bot demo: {e}")
        print("Make sure demos/hamilton_demo.py exists.")
    except Exception as e:
        print(f"❌ Error during bot run: {e}")

    input("\nPress Enter to return to menu...")


def show_cycle():
    """Print a generated Hamiltonian cycle"""
    config = get_config("Cycle Viewer", show_speed=False)

    try:
        from algorithms.hamilton_cycle import visualize_cycle
        visualize_cycle(config['grid_size'], seed=config['seed'])
    except ImportError as e:
        print(f"❌ Error: Could not import cycle module: {e}")
        print("Make sure algorithms/hamilton_cycle.py exists.")
    except Exception as e:
        print(f"❌ Error while building cycle: {e}")

    input("\nPress Enter to return to menu...")


def main():
    """Main menu loop"""
    while True:
        clear_screen()
        print_banner()
        print_menu()

        choice = input("Enter your choice (1-4): ").strip()

        if choice == '1':
            watch_bot("shortcut")
        elif choice == '2':
            watch_bot("greedy")
        elif choice == '3':
            show_cycle()
        elif choice == '4':
            print("\n👋 Goodbye!\n")
            sys.exit(0)
        else:
            print("\n❌ Invalid choice. Please enter 1-4.")
            input("Press Enter to continue...")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!\n")
        sys.exit(0)
