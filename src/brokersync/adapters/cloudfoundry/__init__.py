"""Public interface for the Cloud Foundry adapter."""

from __future__ import annotations

from .client import CloudFoundryAPIError, CloudFoundryClient
from .schema import Page, Resource

__all__ = [
    "CloudFoundryAPIError",
    "CloudFoundryClient",
    "Page",
    "Resource",
]
