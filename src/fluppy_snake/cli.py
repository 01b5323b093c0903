"""Command-line launcher for the Fluppy Snake server."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fluppy-snake",
        description="Fluppy Snake game server and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    serve_p.add_argument(
        "--high-score-file", type=str, default=None,
        help="Persist the high score to this JSON file.",
    )
    serve_p.add_argument(
        "--log-level", type=str, default="info",
        choices=["debug", "info", "warning", "error"],
    )

    # --- init-config ---
    init_p = sub.add_parser(
        "init-config", help="Write the default config to a JSON file.",
    )
    init_p.add_argument("output", help="Destination path.")

    return parser


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from fluppy_snake.config import GameConfig
    from fluppy_snake.server.app import create_app

    config = GameConfig.load(args.config) if args.config else GameConfig()
    if args.high_score_file:
        config = dataclasses.replace(config, high_score_path=args.high_score_file)

    logging.getLogger().setLevel(args.log_level.upper())
    logger.info("Serving on %s:%d", args.host, args.port)
    uvicorn.run(
        create_app(config),
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    return 0


def _run_init_config(args: argparse.Namespace) -> int:
    from fluppy_snake.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``fluppy-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "init-config": _run_init_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
