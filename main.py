#!/usr/bin/env python3
"""
N-dimensional Minesweeper - Main entry point.

Usage:
    python main.py evaluate [--dims D [D ...]] [--mines M] [--games N] [--seed S]
    python main.py show [--dims D [D ...]] [--mines M] [--seed S]
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from agents import RandomAgent
from ndmines import BoardConfig, InvalidConfiguration, MinesweeperEnv
from training import Evaluator


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Board configuration from command-line arguments."""
    return BoardConfig(tuple(args.dims), args.mines, args.seed)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate the random agent."""
    config = build_config(args)
    agent = RandomAgent(config.dimensions, seed=args.seed)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    shape = "x".join(str(d) for d in config.dimensions)
    print(f"\nEvaluating Random on {shape} with {config.num_mines} mines over {args.games} games...")
    results = evaluator.evaluate(agent)

    print("Results for Random:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def show(args: argparse.Namespace) -> None:
    """Play one random game and print the final board."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = RandomAgent(config.dimensions, seed=args.seed)

    obs, info = env.reset(seed=args.seed)
    done = False
    while not done:
        action = agent.select_action(obs, env.get_action_mask())
        obs, _, terminated, truncated, info = env.step(action)
        done = terminated or truncated

    print(env.render())
    print(f"\n{info['game_state']} after {info['steps']} moves")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="N-dimensional Minesweeper - play and evaluate agents"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    board_args = argparse.ArgumentParser(add_help=False)
    board_args.add_argument(
        "--dims", type=int, nargs="+", default=[9, 9], help="Extent of each axis"
    )
    board_args.add_argument(
        "--mines", type=int, default=10, help="Number of mines"
    )
    board_args.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    # Evaluate command
    eval_parser = subparsers.add_parser(
        "evaluate", parents=[board_args], help="Evaluate the random agent"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    # Show command
    subparsers.add_parser(
        "show", parents=[board_args], help="Play one random game and print it"
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    try:
        if args.command == "evaluate":
            evaluate(args)
        elif args.command == "show":
            show(args)
        else:
            parser.print_help()
    except InvalidConfiguration as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
