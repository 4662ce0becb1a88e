"""Pydantic models describing the Cloud Foundry v2 API payloads."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class CFBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ResourceMetadata(CFBaseModel):
    guid: str


class ServiceBrokerEntity(CFBaseModel):
    name: str
    broker_url: str


class ServiceEntity(CFBaseModel):
    label: str = ""
    unique_id: str
    service_broker_guid: str = ""


class ServicePlanEntity(CFBaseModel):
    name: str = ""
    unique_id: str
    public: bool = False
    service_guid: str = ""


class VisibilityEntity(CFBaseModel):
    service_plan_guid: str
    organization_guid: str


EntityT = TypeVar("EntityT", bound=CFBaseModel)


class Resource(CFBaseModel, Generic[EntityT]):
    metadata: ResourceMetadata
    entity: EntityT


class Page(CFBaseModel, Generic[EntityT]):
    total_results: int = 0
    next_url: str | None = None
    resources: list[Resource[EntityT]] = Field(default_factory=list)


class ErrorResponse(CFBaseModel):
    code: int | None = None
    error_code: str = ""
    description: str = ""


class InfoResponse(CFBaseModel):
    token_endpoint: str


class TokenResponse(CFBaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = 0
