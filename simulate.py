import argparse
import sys
import time

from loguru import logger

from ludo_rules import Game, RandomDice, Simulator, config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play one four-player Ludo game with random token choices"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.SEED,
        help="Seed for both the dice and the token picker",
    )
    parser.add_argument(
        "--max-commands",
        type=int,
        default=config.MAX_COMMANDS,
        help="Stop after this many roll/select commands",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every transition",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else config.LOG_LEVEL)

    print("--- Starting Random Game Simulation ---")
    print(f"Seed: {args.seed}, command cap: {args.max_commands}")
    start_time = time.time()

    game = Game(dice=RandomDice(args.seed))
    sim = Simulator.for_game(game, seed=args.seed)
    summary = sim.run(max_commands=args.max_commands)

    print("\n--- SIMULATION COMPLETE ---")
    print(f"Winner: {summary.winner.name if summary.winner is not None else 'none'}")
    print(f"Commands: {summary.commands}")
    print(f"Rolls: {summary.rolls} (passes: {summary.passes})")
    print(f"Moves: {summary.moves}")
    print(f"Captures: {summary.captures}")
    print(f"Bonus rolls: {summary.bonus_rolls}")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")
    print(f"Final status: {game.state.status_message}")


if __name__ == "__main__":
    main()
