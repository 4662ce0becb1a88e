"""Port for reading the desired broker set from the central registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from brokersync.domain.model import DesiredBroker


@runtime_checkable
class BrokerSource(Protocol):
    """Supplies the brokers for which a proxy registration should exist."""

    def get_brokers(self) -> list[DesiredBroker]: ...


__all__ = ["BrokerSource"]
