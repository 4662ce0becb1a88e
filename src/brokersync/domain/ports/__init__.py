"""Domain port definitions for adapters."""

from __future__ import annotations

from .platform import AccessController, CatalogFetcher, PlatformRegistry
from .registry import BrokerSource
from .visibility import VisibilityPlatform

__all__ = [
    "AccessController",
    "BrokerSource",
    "CatalogFetcher",
    "PlatformRegistry",
    "VisibilityPlatform",
]
