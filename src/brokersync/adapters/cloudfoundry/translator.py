"""Translate Cloud Foundry resources into domain entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from brokersync.domain.model import PlatformPlan, PlatformService, RegisteredBroker, Visibility

if TYPE_CHECKING:
    from .schema import (
        Resource,
        ServiceBrokerEntity,
        ServiceEntity,
        ServicePlanEntity,
        VisibilityEntity,
    )


def parse_broker(resource: Resource[ServiceBrokerEntity]) -> RegisteredBroker:
    return RegisteredBroker(
        guid=resource.metadata.guid,
        name=resource.entity.name,
        broker_url=resource.entity.broker_url,
    )


def parse_service(resource: Resource[ServiceEntity]) -> PlatformService:
    return PlatformService(
        guid=resource.metadata.guid,
        unique_id=resource.entity.unique_id,
        name=resource.entity.label,
    )


def parse_plan(resource: Resource[ServicePlanEntity]) -> PlatformPlan:
    return PlatformPlan(
        guid=resource.metadata.guid,
        unique_id=resource.entity.unique_id,
        public=resource.entity.public,
        name=resource.entity.name,
        service_guid=resource.entity.service_guid,
    )


def parse_visibility(resource: Resource[VisibilityEntity]) -> Visibility:
    return Visibility(
        guid=resource.metadata.guid,
        plan_guid=resource.entity.service_plan_guid,
        organization_guid=resource.entity.organization_guid,
    )
