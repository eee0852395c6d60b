"""Labyrinth Arcade CLI entry point.

Provides subcommands for running the maze API server and printing a
generated maze to the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False


def _load_version() -> str:
    here = os.path.dirname(os.path.abspath(__file__))
    try:
        with open(os.path.join(here, "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Labyrinth Arcade

    Serve the procedural maze API or print a generated maze. Configuration can
    be provided via CLI flags or environment variables. If both are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          MAZE_MAX_ATTEMPTS    Generation attempts before falling back (default: 30)
          MAZE_JOIN_POCKETS    Dig routes to floor pockets the carving cut off (default: 1)
          LABYRINTH_LOG_LEVEL  debug | info | warn | error (default: info)
          LABYRINTH_LOG_JSON   Emit JSON log lines when set to 1

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print the maze for seed 42
          python run.py maze --seed 42

          # Same maze as JSON, level 2
          python run.py maze --seed 42 --level 2 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Labyrinth",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Structured log threshold (default: env LABYRINTH_LOG_LEVEL or info)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Labyrinth Arcade {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the maze API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask maze API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # maze subcommand
    maze_parser = subparsers.add_parser(
        "maze",
        help="Generate a maze and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a maze and print it as ASCII ('#' wall, '.' floor) or JSON",
    )
    maze_parser.add_argument("--seed", default=None, help="Integer or free-text seed (default: current time)")
    maze_parser.add_argument("--cols", type=int, default=28, help="Grid width (default: 28)")
    maze_parser.add_argument("--rows", type=int, default=31, help="Grid height (default: 31)")
    maze_parser.add_argument("--level", type=int, default=0, help="Level index mixed into the seed (default: 0)")
    maze_parser.add_argument("--json", dest="as_json", action="store_true", help="Print JSON instead of ASCII")
    maze_parser.set_defaults(command="maze")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _print_maze(args) -> int:
    from labyrinth.maze import MazeConfig, build_maze
    from labyrinth.routes.maze_api import _coerce_seed

    try:
        config = MazeConfig(cols=args.cols, rows=args.rows, seed=_coerce_seed(args.seed), level=args.level)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1
    maze = build_maze(config=config)
    if args.as_json:
        print(maze.to_json())
        return 0
    status = "validated" if maze.validated else "FALLBACK"
    header = f"seed={maze.seed} level={args.level} attempts={maze.attempts} {status} warp_rows={maze.warp_rows}"
    print(_paint(header, Fore.CYAN))
    print(maze.to_ascii())
    return 0 if maze.validated else 2


def _paint(text, *styles) -> str:
    if not _COLOR_ENABLED:
        return str(text)
    return "".join(styles) + str(text) + Style.RESET_ALL


def _print_banner(mode: str, host: str, port: int, debug: bool) -> None:
    divider = _paint("=" * 40, Fore.MAGENTA)
    rows = [("Mode:", mode.upper()), ("Host:", host), ("Port:", port), ("Debug:", "YES" if debug else "NO")]
    lines = [divider, "  " + _paint("Labyrinth Arcade", Fore.CYAN, Style.BRIGHT) + f" v{__version__}", divider]
    lines += [f"  {_paint(label, Fore.YELLOW):12} {_paint(val, Fore.GREEN)}" for label, val in rows]
    lines += [divider, ""]
    print("\n".join(lines))


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    from labyrinth import logging_utils

    if args.log_level:
        logging_utils.set_level(args.log_level)

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "maze":
        return _print_maze(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from labyrinth import server

    _print_banner(mode, host, port, debug)
    logging_utils.log.info(event="startup", mode=mode, host=host, port=port, version=__version__)
    server.start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
