"""Translate registry payloads into domain brokers."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from brokersync.domain.model import Catalog, DesiredBroker, Plan, Service

if TYPE_CHECKING:
    from .schema import BrokerPayload, CatalogPayload


def parse_catalog(payload: CatalogPayload) -> Catalog:
    return Catalog(
        services=tuple(
            Service(
                id=service.id,
                name=service.name,
                plans=tuple(Plan(id=plan.id, name=plan.name) for plan in service.plans),
            )
            for service in payload.services
        )
    )


def parse_broker(payload: BrokerPayload) -> DesiredBroker:
    return DesiredBroker(
        id=payload.id,
        broker_url=payload.broker_url,
        catalog=parse_catalog(payload.catalog) if payload.catalog is not None else None,
        metadata=MappingProxyType(dict(payload.metadata)),
    )
