"""Shared logging helpers for brokersync."""

from __future__ import annotations

import logging

LOG_LEVEL_ENV = "BROKERSYNC_LOG_LEVEL"


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for a long-running process. ``level``
    also accepts level names such as ``"DEBUG"``. Pass ``force=True`` to reconfigure
    during tests or specialised entry points.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        force=force,
    )
