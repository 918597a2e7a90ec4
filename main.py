# main.py

"""Entry point for the price_watcher service and its CLI commands."""

import argparse
import asyncio
import logging
import sys

from price_watcher.config.logging_config import setup_logging

logger = logging.getLogger("price_watcher.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="price_watcher",
        description=(
            "Watch product prices on e-commerce sites and notify "
            "Telegram subscribers about changes."
        ),
        epilog="Configuration is read from the environment or a .env file.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        default=False,
        help="Run a single check cycle and print the results.",
    )
    parser.add_argument(
        "--fetch",
        default=None,
        metavar="URL",
        help="Fetch and print the current price of one product URL.",
    )
    parser.add_argument(
        "--sites",
        action="store_true",
        default=False,
        help="List the supported sites.",
    )
    return parser


def _run_service() -> None:
    """Run the watch loop until interrupted."""
    from price_watcher.cli.runner import run_service

    try:
        exit_code = asyncio.run(run_service())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        exit_code = 0
    except Exception:
        logger.critical("Fatal error in price_watcher service", exc_info=True)
        raise
    sys.exit(exit_code)


def _run_once() -> None:
    """Run one check cycle and exit."""
    from price_watcher.cli.runner import run_once

    sys.exit(asyncio.run(run_once()))


def _run_fetch(url: str) -> None:
    """Fetch one URL and exit."""
    from price_watcher.cli.runner import fetch_single

    sys.exit(asyncio.run(fetch_single(url)))


def _run_sites() -> None:
    """List supported sites and exit."""
    from price_watcher.cli.runner import list_sites

    sys.exit(list_sites())


def main() -> None:
    """Route to the service (no args) or a one-shot command."""
    log_file = setup_logging()
    logger.info("price_watcher starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.sites:
        _run_sites()
    elif args.fetch:
        _run_fetch(args.fetch)
    elif args.once:
        _run_once()
    else:
        _run_service()


if __name__ == "__main__":
    main()
