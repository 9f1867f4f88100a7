"""Command line entry point: generate, solve or play a maze in the terminal."""

import argparse
import logging
import sys

from .domain.path import get_path_directions
from .domain.search import run_search
from .domain.types import DIFFICULTIES, GameConfig, get_difficulty
from .utils.ascii_view import render_grid
from .utils.highscore import HighScoreStore
from .utils.rng import SeededRNG

KEY_DIRECTIONS = {
    "w": (0, -1),
    "s": (0, 1),
    "a": (-1, 0),
    "d": (1, 0),
}

DIRECTION_NAMES = {
    (0, -1): "up",
    (0, 1): "down",
    (-1, 0): "left",
    (1, 0): "right",
}

PLAY_HELP = "w/a/s/d move, u undo, r reset, n new maze, v reverse mode, h hint, x dead-end hint, q quit"


def describe_path(path) -> str:
    """Summarize a path as its length and first direction."""
    directions = get_path_directions(path)
    if not directions:
        return "already there"
    return f"{len(directions)} steps, first {DIRECTION_NAMES.get(directions[0], directions[0])}"


def run_once(args) -> int:
    """Generate one maze, print it and optionally the search results."""
    from .app.session import MazeSession

    session = MazeSession.generate(
        max(7, args.cols), max(7, args.rows),
        difficulty=get_difficulty(args.difficulty),
        rng=SeededRNG(args.seed),
    )

    hint = None
    if args.solve:
        result = run_search(session.hint_request())
        if result.path is None:
            print("No path to the end")
        else:
            print(f"Solution: {describe_path(result.path)}")
            hint = result.path

    if args.dead_end:
        request = session.dead_end_request()
        result = run_search(request) if request else None
        if result is None or not result.is_meaningful:
            print("No reachable dead end")
        else:
            print(f"Nearest dead end {result.path[-1]}: {describe_path(result.path)}")
            hint = result.path

    print(f"Maze {session.cols}x{session.rows}, {len(session.tracker.dead_ends())} dead ends")
    print(render_grid(session.grid, session.start, session.end, session.position, hint))
    return 0


def run_interactive(args) -> int:
    """Play in the terminal through the controller, reading commands from stdin."""
    from PySide6.QtCore import QCoreApplication
    from .app.controller import MazeController

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    config = GameConfig(difficulty=args.difficulty, threaded_search=False,
                        highscore_path=args.highscore_file)
    controller = MazeController(config=config, high_scores=HighScoreStore(args.highscore_file),
                                seed=args.seed, cols=args.cols, rows=args.rows)
    controller.error_occurred.connect(lambda message: print(f"Error: {message}"))
    controller.maze_completed.connect(
        lambda result: print(f"Maze complete! Score {result.score} "
                             f"(finish bonus {result.finish_bonus}), high score {result.high_score}")
    )
    controller.set_reverse_mode(args.reverse)

    print(PLAY_HELP)
    try:
        while True:
            session = controller.session
            print(render_grid(session.grid, session.start, session.end,
                              session.position, controller.hint_path))
            print(f"{session.state_machine.get_state_description()}  "
                  f"Score {session.score}  High {controller.high_score}  "
                  f"Progress {session.progress_percent()}%  Time {session.elapsed_seconds()}s  "
                  f"Reverse {'on' if controller.reverse_mode else 'off'}")
            controller.clear_hint()

            line = input("> ").strip().lower()
            for key in line:
                if key == "q":
                    return 0
                elif key in KEY_DIRECTIONS:
                    controller.move(*KEY_DIRECTIONS[key])
                elif key == "u":
                    controller.undo()
                elif key == "r":
                    controller.reset_maze()
                elif key == "n":
                    controller.generate_maze(controller.session.cols, controller.session.rows)
                elif key == "v":
                    controller.set_reverse_mode(not controller.reverse_mode)
                elif key == "h":
                    controller.request_hint()
                elif key == "x":
                    if not controller.request_dead_end_hint():
                        print("No reachable dead ends")
                else:
                    print(PLAY_HELP)
    except (EOFError, KeyboardInterrupt):
        return 0
    finally:
        controller.shutdown()
        app.processEvents()


def main(argv=None) -> int:
    """Main entry point for the command line."""
    parser = argparse.ArgumentParser(description="Generate, solve and play grid mazes")
    parser.add_argument("--cols", type=int, default=21, help="Maze width (even values become odd)")
    parser.add_argument("--rows", type=int, default=21, help="Maze height (even values become odd)")
    parser.add_argument("--difficulty", type=str, default="normal", choices=sorted(DIFFICULTIES),
                        help="Difficulty profile")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--solve", action="store_true", help="Show the shortest path to the end")
    parser.add_argument("--dead-end", action="store_true", help="Show the path to the nearest dead end")
    parser.add_argument("--play", action="store_true", help="Play interactively")
    parser.add_argument("--reverse", action="store_true", help="Start play in reverse mode")
    parser.add_argument("--highscore-file", type=str, default=None, help="High score JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.play:
        return run_interactive(args)
    return run_once(args)


if __name__ == "__main__":
    sys.exit(main())
