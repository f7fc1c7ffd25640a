#!/usr/bin/env python3
"""Pyth Price Relayer.

Fetches signed price updates from Pyth Hermes and submits them to the
on-chain price oracle, or reads prices stored by that oracle.

Configuration comes from environment variables, listed in --help.
"""

import argparse
import asyncio
import json
import logging
import sys

from .src.errors import ConfigError
from .src.PriceReader import PriceReader
from .src.PriceUpdater import PriceUpdater
from .src.RelayerConfig import RelayerConfig
from .src.UpdateScheduler import UpdateScheduler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

PRICE_COMMANDS = ("price", "asset-price")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Pyth Price Relayer: push Hermes price updates on-chain",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  (none)                  Submit one price update and exit
  continuous              Submit price updates every UPDATE_INTERVAL seconds
  price <address>         Read getUnderlyingPrice for a cToken
  asset-price <address>   Read assetPrices for an asset

Environment variables:
  PRIVATE_KEY_TEST (required for updates), ORACLE_ADDRESS, RPC_URL,
  HERMES_URL, PRICE_IDS, EXPLORER_URL, UPDATE_INTERVAL, HTTP_TIMEOUT,
  RECEIPT_TIMEOUT
""",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["continuous", *PRICE_COMMANDS],
        help="Command to run (default: one price update)",
    )
    parser.add_argument(
        "address",
        nargs="?",
        help="Contract address for price and asset-price",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser


def run(args: argparse.Namespace, config: RelayerConfig) -> int:
    """Dispatch a parsed command.

    :param args: Parsed command line arguments.
    :param config: Relayer configuration.
    :returns: Process exit code.
    """
    if args.command == "price":
        result = PriceReader(config).get_underlying_price(args.address)
    elif args.command == "asset-price":
        result = PriceReader(config).get_asset_price(args.address)
    elif args.command == "continuous":
        updater = PriceUpdater(config)
        scheduler = UpdateScheduler.from_config(config, updater.update_prices)
        asyncio.run(scheduler.run_forever())
        return 0
    else:
        result = asyncio.run(PriceUpdater(config).update_prices())

    print(json.dumps(result.to_dict()))
    return 0 if result.success else 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the relayer CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command in PRICE_COMMANDS and not args.address:
        parser.error(f"{args.command} requires an address")

    try:
        config = RelayerConfig.from_env()
        if args.command not in PRICE_COMMANDS:
            # Fail before any network call when updates cannot be signed
            config.require_private_key()
        sys.exit(run(args, config))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
