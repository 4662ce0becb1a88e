"""Ports for broker registrations on the target platform.

``CatalogFetcher`` and ``AccessController`` are optional capabilities: a
platform client either satisfies them or it does not, and callers test for
them with ``isinstance``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from brokersync.domain.model import (
        CreateBrokerRequest,
        DeleteBrokerRequest,
        RegisteredBroker,
        UpdateBrokerRequest,
    )


@runtime_checkable
class PlatformRegistry(Protocol):
    """CRUD contract for broker registrations on the platform."""

    def get_brokers(self) -> list[RegisteredBroker]: ...

    def create_broker(self, request: CreateBrokerRequest) -> RegisteredBroker: ...

    def delete_broker(self, request: DeleteBrokerRequest) -> None: ...

    def update_broker(self, request: UpdateBrokerRequest) -> RegisteredBroker: ...


@runtime_checkable
class CatalogFetcher(Protocol):
    """Asks the platform to refresh its cached copy of a broker catalog."""

    def fetch(self, broker: RegisteredBroker) -> None: ...


@runtime_checkable
class AccessController(Protocol):
    """Grants or revokes visibility of services and plans.

    ``scope_payload`` is a JSON object; an optional ``org_guid`` narrows the
    decision to one organization, otherwise it applies globally.
    """

    def enable_access_for_service(self, scope_payload: bytes, service_id: str) -> None: ...

    def disable_access_for_service(self, scope_payload: bytes, service_id: str) -> None: ...

    def enable_access_for_plan(self, scope_payload: bytes, plan_id: str) -> None: ...

    def disable_access_for_plan(self, scope_payload: bytes, plan_id: str) -> None: ...


__all__ = ["AccessController", "CatalogFetcher", "PlatformRegistry"]
