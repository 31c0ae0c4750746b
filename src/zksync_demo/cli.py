#!/usr/bin/env python3
"""Command line interface for the zkSync demo.

Loads the JSON config, builds the SDK instance and runs the selected
operation. Every error is fatal: it is logged and turned into a non-zero
exit status.
"""

import argparse
import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from .config import CONFIG_PATH_ENV, DemoConfig
from .errors import ConfigError, DemoError
from .instance import build_instance
from .models import CONFIRMATION_DELAY, Operation
from .operations import OperationRunner

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def non_negative_float(value: str) -> float:
    """argparse type for --delay."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return number


def positive_int(value: str) -> int:
    """argparse type for --amount."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="zksync-demo",
        description="zkSync demo - deposit, transfer or withdraw ETH through the zkSync SDK",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""Config file keys:
  account_pk   - Hex-encoded private key of the demo account
  zk_url       - RPC endpoint of the zkSync (layer-2) node
  eth_url      - RPC endpoint of the Ethereum (layer-1) node
  zk_chain_id  - Chain id of the layer-2 network

Environment Variables:
  {CONFIG_PATH_ENV}  - Config file path (default: config.json)
  LOG_LEVEL           - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument(
        "operation",
        type=Operation,
        choices=list(Operation),
        metavar="{" + ",".join(op.value for op in Operation) + "}",
        help="Operation to run"
    )
    parser.add_argument(
        "--config",
        default=DemoConfig.default_path(),
        help="Path to the JSON config file (default: config.json)"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    parser.add_argument(
        "--delay",
        type=non_negative_float,
        default=CONFIRMATION_DELAY,
        help=f"Seconds to wait before re-reading balances (default: {CONFIRMATION_DELAY:g})"
    )
    parser.add_argument(
        "--amount",
        type=positive_int,
        default=None,
        help="Amount in wei (default: the operation's fixed demo amount)"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the zkSync demo.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    # .env in the working directory may set ZKSYNC_DEMO_CONFIG and LOG_LEVEL
    load_dotenv(Path.cwd() / ".env")
    args: argparse.Namespace = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger.info(f"=== zkSync Demo: {args.operation.value} ===")

    try:
        logger.info(f"Loading configuration from {args.config}...")
        config: DemoConfig = DemoConfig.from_file(args.config)
        config.log_config()

        instance = build_instance(config)
        runner = OperationRunner(instance, delay=args.delay)
        result = runner.run(args.operation, amount=args.amount)
        logger.info(f"{result.operation.value} finished: {result.tx_hash}")
        logger.debug(f"Result: {json.dumps(result.to_dict())}")
        return 0

    except ConfigError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Please check your config file keys:")
        logger.error("  - account_pk, zk_url, eth_url, zk_chain_id")
        return 1

    except DemoError as e:
        logger.error(f"Fatal Error: {e}")
        return 1

    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
        return 130

    except Exception as e:
        logger.error(f"Fatal Error: {e}", exc_info=True)
        return 1
