"""Public interface for the registry adapter."""

from __future__ import annotations

from .client import BROKERS_PATH, RegistryClient
from .schema import BrokerPayload, BrokersResponse
from .translator import parse_broker

__all__ = [
    "BROKERS_PATH",
    "BrokerPayload",
    "BrokersResponse",
    "RegistryClient",
    "parse_broker",
]
