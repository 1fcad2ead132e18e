"""Command-line interface for the StatFarm dashboard."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from rich.console import Console

from .components import estimate_table
from .config import load_config
from .fetchers import FetchError, JsonFetcher
from .logging_setup import configure_logging
from .services import Dashboard, estimate_rewards
from .sinks import MemorySink

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="statfarm",
        description="Live Compound (COMP) dashboard",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    watch_parser = sub.add_parser("watch", help="Poll and redraw until interrupted")
    watch_parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Append frames instead of redrawing the screen",
    )

    snapshot_parser = sub.add_parser(
        "snapshot", help="Print one frame once every source has answered"
    )
    snapshot_parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for all sources (default: 30)",
    )

    estimate_parser = sub.add_parser(
        "estimate", help="Estimate the COMP rewards of a position in one market"
    )
    estimate_parser.add_argument("symbol", help="Market symbol, e.g. DAI")
    estimate_parser.add_argument(
        "--supply",
        type=float,
        default=0.0,
        help="USD supplied to the market (default: 0)",
    )
    estimate_parser.add_argument(
        "--borrow",
        type=float,
        default=0.0,
        help="USD borrowed from the market (default: 0)",
    )

    return parser


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "watch":
        if args.no_clear:
            config = replace(config, display=replace(config.display, clear_screen=False))
        await Dashboard(config).run_forever()
    elif args.command == "snapshot":
        sink = MemorySink(width=config.display.width)
        frame = await Dashboard(config, sink=sink).run_snapshot(args.timeout)
        if frame is None:
            sys.exit(1)
        print(frame)
    elif args.command == "estimate":
        try:
            estimate = await estimate_rewards(
                JsonFetcher(config.api),
                config.sources["markets"],
                args.symbol,
                args.supply,
                args.borrow,
            )
        except FetchError as e:
            logger.error("Could not load markets: %s", e)
            sys.exit(1)
        except KeyError as e:
            logger.error("No market for %s: missing %s", args.symbol, e)
            sys.exit(1)
        Console(width=config.display.width).print(estimate_table(estimate))
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        pass
