"""MazeSwipe CLI entry point.

Provides subcommands for running the Socket.IO server, playing in the
terminal, and printing a generated maze. Accepts configuration via flags and
MAZESWIPE_* environment variables, with optional .env loading.

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
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    MazeSwipe

    Slide through a freshly generated maze and reach the goal before the
    countdown runs out. Run the Flask-SocketIO server, play in the terminal,
    or print a maze. If both CLI flags and environment variables are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                      Bind address for the web server (default: 0.0.0.0)
          PORT                      Port for the web server (default: 5000)
          MAZESWIPE_ROWS / _COLS    Maze size, odd and >= 5 (default: 21x21)
          MAZESWIPE_ROUND_DURATION  Countdown length (default: 45)
          MAZESWIPE_WELLNESS_EVERY  Wellness break every Nth win (default: 3)
          MAZESWIPE_HARD_MODE       Goal wanders once visible (default: 0)
          MAZESWIPE_LOG_LEVEL       debug, info, warn or error (default: info)
          MAZESWIPE_LOG_JSON        Emit game events as JSON lines (default: 0)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Play in the terminal on a smaller maze
          python run.py play --rows 11 --cols 11

          # Print a reproducible maze with its generation metrics
          python run.py generate --seed 42 --metrics
        """
    )

    parser = argparse.ArgumentParser(
        prog="MazeSwipe",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before processing flags")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Game event log level (default: env MAZESWIPE_LOG_LEVEL or info)",
    )
    parser.add_argument("--log-json", dest="log_json", action="store_true", help="Emit game events as JSON lines")
    parser.add_argument("--version", action="version", version=f"MazeSwipe {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the real-time Flask/Socket.IO server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode with verbose error pages")
    server_parser.set_defaults(command="server")

    play_parser = subparsers.add_parser(
        "play",
        help="Play in the terminal (Textual)",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Arrow keys slide the player; h toggles hard mode; Enter dismisses breaks; q quits.",
    )
    _add_maze_flags(play_parser)
    play_parser.add_argument("--hard", action="store_true", help="Start in hard mode")
    play_parser.set_defaults(command="play")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Print a generated maze",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_maze_flags(gen_parser)
    gen_parser.add_argument("--metrics", action="store_true", help="Also print generation metrics")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _add_maze_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--rows", type=int, default=None, help="Maze rows (odd, >= 5)")
    p.add_argument("--cols", type=int, default=None, help="Maze columns (odd, >= 5)")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducible mazes")


def _config_from_args(args):
    from dataclasses import replace

    from mazeswipe.config import GameConfig

    cfg = GameConfig.from_env()
    overrides = {}
    for name in ("rows", "cols", "seed"):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val
    if getattr(args, "hard", False):
        overrides["hard_mode"] = True
    return replace(cfg, **overrides) if overrides else cfg


def _run_generate(args) -> int:
    from mazeswipe.maze import Maze

    cfg = _config_from_args(args)
    maze = Maze(rows=cfg.rows, cols=cfg.cols, seed=cfg.seed, strict=cfg.strict_connectivity)
    print(maze.grid)
    if args.metrics:
        print(f"seed={maze.seed}")
        for key, val in maze.metrics.items():
            print(f"{key}={val}")
    return 0


def _apply_log_flags(args) -> None:
    from mazeswipe import logging_utils

    if args.log_level:
        logging_utils.set_level(args.log_level)
    if args.log_json:
        logging_utils.set_json_mode(True)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    _apply_log_flags(args)

    mode = (getattr(args, "command", None) or "server").lower()

    from mazeswipe.maze import InvalidDimensionsError

    try:
        if mode == "generate":
            return _run_generate(args)
        if mode == "play":
            from mazeswipe.play_tui import run_tui

            run_tui(_config_from_args(args))
            return 0
    except InvalidDimensionsError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from mazeswipe.server import start_server

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}MazeSwipe Server{Style.RESET_ALL}" if _COLOR_ENABLED else "MazeSwipe Server"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from mazeswipe.logging_utils import log

    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def cli() -> None:  # pragma: no cover - console script shim
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
