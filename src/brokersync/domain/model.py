"""Domain entities shared by the reconciliation core and the adapters.

Desired brokers come from the central registry, registered brokers from the
target platform. Both are snapshots that live for a single reconciliation
pass; nothing here is cached across runs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _empty_metadata() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Plan:
    """Plan entry of a registry catalog, identified by its catalog id."""

    id: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class Service:
    """Service entry of a registry catalog, identified by its catalog id."""

    id: str
    name: str = ""
    plans: tuple[Plan, ...] = ()


@dataclass(frozen=True, slots=True)
class Catalog:
    services: tuple[Service, ...] = ()


@dataclass(frozen=True, slots=True)
class DesiredBroker:
    """A broker the registry wants proxied on the platform."""

    id: str
    broker_url: str
    catalog: Catalog | None = None
    metadata: Mapping[str, object] = field(default_factory=_empty_metadata)


@dataclass(frozen=True, slots=True)
class RegisteredBroker:
    """A broker registration as reported by the platform."""

    guid: str
    name: str
    broker_url: str


@dataclass(frozen=True, slots=True)
class CreateBrokerRequest:
    name: str
    broker_url: str


@dataclass(frozen=True, slots=True)
class DeleteBrokerRequest:
    guid: str
    name: str


@dataclass(frozen=True, slots=True)
class UpdateBrokerRequest:
    guid: str
    name: str
    broker_url: str


@dataclass(frozen=True, slots=True)
class PlatformService:
    """Platform-local view of a catalog service."""

    guid: str
    unique_id: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class PlatformPlan:
    """Platform-local view of a catalog plan.

    ``public`` is owned by the platform: a public plan is consumable by every
    organization regardless of visibility grants.
    """

    guid: str
    unique_id: str
    public: bool
    name: str = ""
    service_guid: str = ""


@dataclass(frozen=True, slots=True)
class Visibility:
    """Grant making one plan consumable by one organization."""

    guid: str
    plan_guid: str
    organization_guid: str


@dataclass(frozen=True, slots=True)
class AccessScope:
    """Scope of an access decision; no organization means global."""

    organization_guid: str | None = None

    @property
    def is_global(self) -> bool:
        return not self.organization_guid


GLOBAL_SCOPE_PAYLOAD = b"{}"
