from __future__ import annotations

from .logging import LOG_LEVEL_ENV, configure_logging

__all__ = ["LOG_LEVEL_ENV", "configure_logging"]
