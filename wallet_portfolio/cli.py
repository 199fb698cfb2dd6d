"""Command-line interface for the wallet portfolio aggregator."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import load_config
from .errors import PortfolioError
from .formatting import render_portfolio
from .logging_setup import configure_logging
from .models import Portfolio
from .services import PortfolioAggregator, PortfolioTracker

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="wallet-portfolio",
        description="Native and ERC-20 wallet portfolio priced in USD",
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

    show_parser = sub.add_parser("show", help="Aggregate and print a wallet portfolio")
    show_parser.add_argument("address", help="Wallet address")

    watch_parser = sub.add_parser("watch", help="Re-aggregate a wallet periodically")
    watch_parser.add_argument("address", help="Wallet address")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )

    return parser


def _print_portfolio(portfolio: Portfolio) -> None:
    print(render_portfolio(portfolio))
    print()


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    aggregator = PortfolioAggregator(config)

    if args.command == "show":
        portfolio = await aggregator.aggregate(args.address)
        _print_portfolio(portfolio)
    elif args.command == "watch":
        tracker = PortfolioTracker(aggregator)
        interval = args.interval or config.tracker.refresh_interval_seconds
        await tracker.watch(args.address, interval, on_update=_print_portfolio)
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
    except PortfolioError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
