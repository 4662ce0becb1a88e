"""Pydantic models describing the registry broker listing payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PlanPayload(RegistryBaseModel):
    id: str
    name: str = ""


class ServicePayload(RegistryBaseModel):
    id: str
    name: str = ""
    plans: list[PlanPayload] = Field(default_factory=list[PlanPayload])


class CatalogPayload(RegistryBaseModel):
    services: list[ServicePayload] = Field(default_factory=list[ServicePayload])


class BrokerPayload(RegistryBaseModel):
    id: str
    name: str = ""
    broker_url: str
    catalog: CatalogPayload | None = None
    metadata: dict[str, object] = Field(default_factory=dict[str, object])


class BrokersResponse(RegistryBaseModel):
    brokers: list[BrokerPayload] = Field(default_factory=list[BrokerPayload])
