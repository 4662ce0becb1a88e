#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from signal import SIGINT, SIGTERM, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from brokersync.app import build_reconciliation_task, build_scheduler, reconcile_once
from brokersync.common.logging import LOG_LEVEL_ENV, configure_logging
from brokersync.config import ConfigurationError, get_proxy_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep proxy broker registrations in sync with the broker registry"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single reconciliation pass and exit",
    )
    parser.add_argument(
        "--resync-period",
        type=_positive_float,
        help="Seconds between reconciliation passes (defaults to config)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        configure_logging(level=os.getenv(LOG_LEVEL_ENV, "INFO"))
        proxy = get_proxy_config()
        task = build_reconciliation_task(proxy=proxy)
    except (ConfigurationError, ValueError) as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(2)

    if parsed_args.once:
        result = reconcile_once(task)
        if result.aborted:
            sys.exit(1)
        return

    interval = parsed_args.resync_period or proxy.resync_period_seconds
    scheduler = build_scheduler(
        task,
        interval_seconds=interval,
        shutdown_timeout_seconds=proxy.shutdown_timeout_seconds,
    )
    shutdown = threading.Event()

    def shutdown_handler(signal_received: int, _frame: FrameType | None) -> None:
        log.info("Received signal %s, shutting down", signal_received)
        shutdown.set()

    signal(SIGINT, shutdown_handler)
    signal(SIGTERM, shutdown_handler)

    scheduler.start()
    shutdown.wait()
    if not scheduler.stop():
        sys.exit(1)
    log.info("Stopped")


if __name__ == "__main__":
    main()
