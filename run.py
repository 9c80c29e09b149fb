"""Digger CLI entry point.

Provides subcommands for running the dungeon API server and for digging a
dungeon straight to the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from dotenv import load_dotenv

from digger import __version__


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Digger dungeon generator

    Run the JSON API server or dig a linear dungeon of connected rooms and print
    it. Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                       Bind address for the web server (default: 0.0.0.0)
          PORT                       Port for the web server (default: 5000)
          DIGGER_ROOMS               Default number of rooms to dig (default: 10)
          DIGGER_SEED                Default seed for `generate`
          DIGGER_EXTENT              Half-size of the square grid bounds (default: 200)
          DIGGER_STOP_ON_EXHAUSTION  Return a partial dungeon instead of failing
          DIGGER_LOG_LEVEL           debug | info | warn | error
          DIGGER_LOG_JSON            Emit JSON log lines

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Dig 12 rooms from a fixed seed
          python run.py generate --seed 42 --rooms 12

          # Same dungeon as JSON
          python run.py generate --seed 42 --rooms 12 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Digger",
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
        "--version",
        action="version",
        version=f"Digger {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon generation API",
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

    gen_parser = subparsers.add_parser(
        "generate",
        help="Dig a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Dig a linear dungeon and print it as ASCII (or JSON with --json).",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed (default: env DIGGER_SEED or random)")
    gen_parser.add_argument("--rooms", type=int, default=None, help="Number of rooms (default: env DIGGER_ROOMS or 10)")
    gen_parser.add_argument(
        "--partial",
        action="store_true",
        help="Print the rooms dug so far instead of failing when placement is exhausted",
    )
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Emit JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    ns = parser.parse_args(argv)
    if ns.command is None:
        ns.command = "server"
    return ns


def _generate(args) -> int:
    from digger.dungeon import DungeonConfig, GenerationError, apply_env_overrides, dig_dungeon
    from digger.logging_utils import diverted

    # stdout carries only the dungeon
    try:
        with diverted(sys.stderr):
            config = apply_env_overrides(DungeonConfig())
            if args.seed is not None:
                config.seed = args.seed
            if args.rooms is not None:
                config.rooms = args.rooms
            if args.partial:
                config.stop_on_exhaustion = True
            result = dig_dungeon(config)
    except GenerationError as exc:
        print(f"[ERROR] {exc.kind}: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"[ERROR] invalid configuration: {exc}", file=sys.stderr)
        return 2
    if args.as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"seed={result.seed} rooms={len(result.rooms)}")
        print(result.dungeon.render())
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    if args.command == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from digger import server
    from digger.logging_utils import log

    log.info(event="startup", mode="server", host=host, port=port)
    server.start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
