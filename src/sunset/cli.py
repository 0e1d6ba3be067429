"""Command-line interface for sunset.

``sunset serve`` runs the HTTP server; the remaining commands talk to a
running server and print the resulting brightness value.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="sunset",
        description="Display brightness and color temperature control",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/sunset.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Start the HTTP server")
    subparsers.add_parser("get", help="Print the current brightness")
    set_parser = subparsers.add_parser("set", help="Set the brightness")
    set_parser.add_argument("value", type=float, help="New brightness (10-200)")
    subparsers.add_parser("brighter", help="Increase the brightness by one step")
    subparsers.add_parser("darker", help="Decrease the brightness by one step")

    return parser.parse_args(argv)


async def _remote(settings, args) -> float:
    """Run one client command against the configured server."""
    from sunset.client import SunsetClient

    async with SunsetClient(
        base_url=settings.client.base_url,
        timeout=settings.client.timeout,
    ) as client:
        if args.command == "set":
            return await client.set(args.value)
        if args.command == "brighter":
            return await client.brighter()
        if args.command == "darker":
            return await client.darker()
        return await client.get()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the sunset CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from sunset.config.settings import load_settings
    from sunset.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.command == "serve":
        if args.verbose:
            settings.logging.level = "DEBUG"
        setup_logging(settings.logging)
        logger.info("Starting server on %s:%d", settings.server.host, settings.server.port)
        from sunset.server import main as serve

        serve(settings)
        return

    # Client commands only log to the console.
    settings.logging.file = None
    settings.logging.level = "DEBUG" if args.verbose else "WARNING"
    setup_logging(settings.logging)

    from sunset.client import SunsetClientError
    from sunset.domain.models import format_value

    try:
        value = asyncio.run(_remote(settings, args))
    except SunsetClientError as e:
        print(f"sunset: {e}", file=sys.stderr)
        sys.exit(1)
    print(format_value(value))


if __name__ == "__main__":
    main()
