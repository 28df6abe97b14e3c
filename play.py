"""CLI for running Dragonlight headlessly.

Plays the game with the reference autopilot on a synthetic clock and prints
text frames, or prints a freshly generated level.

Usage:
    python play.py run --seed 7 --fps 30 --max-seconds 120 --show-every 30
    python play.py board --seed 7

Environment variables:
    DRAGONLIGHT_LOG_LEVEL  logging level (default: INFO)
"""

import argparse
import logging
import random

from bots.autopilot import Autopilot
from config import GAME_NAME, LOG_LEVEL, MAX_FRAME_DELTA_MS
from engine.game import GameEngine
from engine.render import render_board, render_status
from engine.session import GameSession, ManualClock
from models.actions import FrameSnapshot

logger = logging.getLogger("dragonlight")

# Slower frames would lose level time to the per-tick countdown cap
MIN_FPS = 1000 / MAX_FRAME_DELTA_MS


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _frame_rate(value: str) -> float:
    fps = _positive_float(value)
    if fps < MIN_FPS:
        raise argparse.ArgumentTypeError(f"must be at least {MIN_FPS:g}, got {value}")
    return fps


def _print_frame(snapshot: FrameSnapshot) -> None:
    print(render_board(snapshot.board, snapshot.beam, snapshot.level.stage, snapshot.fireballs))
    print(render_status(snapshot.level, snapshot.phase))
    print()


def run_game(seed: int | None, fps: float, max_seconds: float, show_every: int) -> GameSession:
    """Play one autopilot game and print frames along the way."""
    clock = ManualClock()
    rng = random.Random(seed)
    engine = GameEngine(now=clock(), rng=rng)
    session = GameSession(engine=engine, clock=clock)
    pilot = Autopilot(rng=random.Random(seed))
    frame_ms = 1000 / fps
    logger.debug("Autopilot run: seed=%s fps=%g", seed, fps)

    snapshot = session.snapshot()
    while not session.finished and clock() < max_seconds * 1000:
        clock.advance(frame_ms)
        snapshot = session.tick(pilot.choose(snapshot))
        if show_every and session.frames % show_every == 0:
            _print_frame(snapshot)

    _print_frame(snapshot)
    message = session.final_message()
    if message is None:
        print(f"Stopped after {max_seconds:g}s of game time.")
    else:
        print(message)
    for event in engine.get_events()[-10:]:
        print(f"  [Stage {event.stage} Level {event.level}] {event.description}")
    return session


def show_board(seed: int | None) -> None:
    """Print a freshly generated first level."""
    engine = GameEngine(rng=random.Random(seed))
    level = engine.get_game_level()
    beam = engine.get_flashlight_beam()
    print(render_board(engine.get_board(), beam, level.stage))
    print(render_status(level, engine.get_game_state()))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description=f"Run {GAME_NAME} headlessly",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help=f"Logging level (default: {LOG_LEVEL})")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Play a game with the autopilot")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    run_parser.add_argument(
        "--fps", type=_frame_rate, default=30.0,
        help=f"Simulated frames per second (at least {MIN_FPS:g})",
    )
    run_parser.add_argument("--max-seconds", type=_positive_float, default=300.0, help="Game-time limit")
    run_parser.add_argument("--show-every", type=int, default=0, help="Print every Nth frame (0: only the last)")

    board_parser = subparsers.add_parser("board", help="Print a fresh level")
    board_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "run":
        run_game(args.seed, args.fps, args.max_seconds, args.show_every)
    elif args.command == "board":
        show_board(args.seed)


if __name__ == "__main__":
    main()
