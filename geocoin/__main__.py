"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``            → Launch the FastAPI game server
  - ``python -m geocoin cli``        → Headless scripted walk
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

_MOVE_LETTERS = {"N": "NORTH", "E": "EAST", "S": "SOUTH", "W": "WEST"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocoin — location-based coin caches")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=0)
    srv.add_argument("--storage", type=str, default=None, help="JSON save file (default: in-memory)")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Walk a scripted route without a server")
    cli.add_argument("--seed", type=int, default=0)
    cli.add_argument("--moves", type=str, default="", help="Route as letters N/E/S/W, e.g. NNEESW")
    cli.add_argument("--collect", action="store_true", help="Empty every cache on the player's cell")
    cli.add_argument("--radius", type=int, default=8)
    cli.add_argument("--storage", type=str, default=None, help="JSON save file (default: in-memory)")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig

    config = GameConfig(
        world_seed=args.seed,
        storage_path=args.storage,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> int:
    from geocoin.config import GameConfig
    from geocoin.core.enums import Direction
    from geocoin.engine.session import GameSession
    from geocoin.utils.logging import setup_logging

    config = GameConfig(
        world_seed=args.seed,
        visibility_radius=args.radius,
        storage_path=args.storage,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    route = args.moves.upper()
    unknown = sorted(set(route) - set(_MOVE_LETTERS))
    if unknown:
        logger.error("Unknown move letter(s): %s", ", ".join(unknown))
        return 2

    session = GameSession(config)
    session.start()
    collected = 0

    def _loot_here() -> int:
        cache = session.neighborhood.cache_at(session.current_cell)
        if cache is None:
            return 0
        n = 0
        while session.collect(cache.cell) is not None:
            n += 1
        return n

    if args.collect:
        collected += _loot_here()
    for letter in route:
        session.step(Direction[_MOVE_LETTERS[letter]])
        if args.collect:
            collected += _loot_here()

    session.close()
    census = session.census()
    logger.info(
        "Done after %d moves at %r: %d coins in inventory (%d collected), "
        "%d caches in view, %d archived, %d coins tracked",
        session.moves, session.current_cell, len(session.inventory), collected,
        len(session.active_caches), len(session.store), sum(census.values()),
    )
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        raise SystemExit(_run_cli(args))


if __name__ == "__main__":
    main()
