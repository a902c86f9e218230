"""Command line entry point for the order processor"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from order_processor.core.config import Config, parse_duration
from order_processor.processor import OrderProcessor
from order_processor.shared.exceptions import ConfigurationError, ResourceError
from order_processor.shared.logging_bridge import configure_logging


def build_parser(defaults: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="order-processor",
        description=(
            "Process trading orders from a file. Filters orders by symbol "
            "and side, then makes an API request for each matching order."
        ),
    )
    parser.add_argument(
        "--file",
        type=Path,
        help=f"Input file containing order data (default: {defaults.input_file})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help=f"Output file for API responses (default: {defaults.output_file})",
    )
    parser.add_argument(
        "--symbol",
        help=f"Symbol to filter orders by (default: {defaults.symbol})",
    )
    parser.add_argument(
        "--side",
        help=f"Side to filter orders by, buy/sell (default: {defaults.side})",
    )
    parser.add_argument(
        "--retry",
        type=int,
        help=f"Number of retry attempts for failed requests (default: {defaults.retries})",
    )
    parser.add_argument(
        "--timeout",
        help=(
            "Timeout for HTTP requests, e.g. 30s or 500ms, 0 for none "
            f"(default: {defaults.timeout}s)"
        ),
    )
    parser.add_argument(
        "--insecure",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip TLS verification",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--url",
        help=f"Base URL for the API (default: {defaults.base_url})",
    )
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    """Resolve configuration from the environment and command line flags

    Raises:
        ConfigurationError: If any value is invalid
    """
    defaults = Config.from_env()
    args = build_parser(defaults).parse_args(argv)

    return defaults.with_overrides(
        input_file=args.file,
        output_file=args.output,
        symbol=args.symbol,
        side=args.side,
        base_url=args.url,
        retries=args.retry,
        timeout=parse_duration(args.timeout) if args.timeout else None,
        insecure=args.insecure,
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the order processor

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_config(argv)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(config.verbose)
    logger.info("Starting order processor")
    config.log()

    try:
        OrderProcessor(config).run()
    except ResourceError as e:
        logger.error(f"Processing failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Processing stopped manually.")
        return 1

    logger.info("Processing completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
