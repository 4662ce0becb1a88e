"""HTTP client for the Cloud Foundry v2 API.

Implements broker registration CRUD, catalog refresh and the service plan
visibility primitives used by access reconciliation.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ValidationError

from brokersync.adapters.http_resilience import ResilientClient
from brokersync.domain.errors import PlatformError
from brokersync.domain.model import UpdateBrokerRequest

from .schema import (
    CFBaseModel,
    ErrorResponse,
    InfoResponse,
    Page,
    Resource,
    ServiceBrokerEntity,
    ServiceEntity,
    ServicePlanEntity,
    TokenResponse,
    VisibilityEntity,
)
from .translator import parse_broker, parse_plan, parse_service, parse_visibility

if TYPE_CHECKING:
    from collections.abc import Callable, Collection

    from brokersync.config.cloudfoundry import CloudFoundryConfig
    from brokersync.config.http_resilience import ResilienceConfig
    from brokersync.domain.model import (
        CreateBrokerRequest,
        DeleteBrokerRequest,
        PlatformPlan,
        PlatformService,
        RegisteredBroker,
        Visibility,
    )

log = getLogger(__name__)

BROKERS_PATH = "/v2/service_brokers"
SERVICES_PATH = "/v2/services"
PLANS_PATH = "/v2/service_plans"
VISIBILITIES_PATH = "/v2/service_plan_visibilities"
INFO_PATH = "/v2/info"

# Refresh tokens a little before the server considers them expired.
_TOKEN_EXPIRY_MARGIN_SECONDS = 30.0


class CloudFoundryAPIError(PlatformError):
    """Raised when the Cloud Foundry API rejects a request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: int | None = None,
        error_code: str = "",
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.code = code
        self.error_code = error_code


@dataclass(slots=True)
class _AccessToken:
    value: str
    expires_at: float | None

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at


class CloudFoundryClient:
    """Platform client for Cloud Foundry."""

    def __init__(
        self,
        *,
        config: CloudFoundryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._token: _AccessToken | None = None

    # -- broker registrations ------------------------------------------------

    def get_brokers(self) -> list[RegisteredBroker]:
        resources = asyncio.run(self._list(BROKERS_PATH, ServiceBrokerEntity))
        return [parse_broker(resource) for resource in resources]

    def create_broker(self, request: CreateBrokerRequest) -> RegisteredBroker:
        resource = asyncio.run(
            self._call(
                "POST",
                BROKERS_PATH,
                json=self._registration_body(request.name, request.broker_url),
                expected=(201,),
                model=Resource[ServiceBrokerEntity],
            )
        )
        return parse_broker(resource)

    def update_broker(self, request: UpdateBrokerRequest) -> RegisteredBroker:
        resource = asyncio.run(
            self._call(
                "PUT",
                f"{BROKERS_PATH}/{request.guid}",
                json=self._registration_body(request.name, request.broker_url),
                expected=(200, 201),
                model=Resource[ServiceBrokerEntity],
            )
        )
        return parse_broker(resource)

    def delete_broker(self, request: DeleteBrokerRequest) -> None:
        asyncio.run(self._call("DELETE", f"{BROKERS_PATH}/{request.guid}", expected=(204,)))

    def fetch(self, broker: RegisteredBroker) -> None:
        """Refresh the platform's catalog copy by re-registering the broker unchanged."""

        self.update_broker(
            UpdateBrokerRequest(guid=broker.guid, name=broker.name, broker_url=broker.broker_url)
        )

    # -- services, plans and visibilities ------------------------------------

    def find_services_by_unique_id(self, unique_id: str) -> list[PlatformService]:
        resources = asyncio.run(
            self._list(SERVICES_PATH, ServiceEntity, query=f"unique_id:{unique_id}")
        )
        return [parse_service(resource) for resource in resources]

    def find_plans_by_unique_id(self, unique_id: str) -> list[PlatformPlan]:
        resources = asyncio.run(
            self._list(PLANS_PATH, ServicePlanEntity, query=f"unique_id:{unique_id}")
        )
        return [parse_plan(resource) for resource in resources]

    def list_plans_for_service(self, service_guid: str) -> list[PlatformPlan]:
        resources = asyncio.run(
            self._list(PLANS_PATH, ServicePlanEntity, query=f"service_guid:{service_guid}")
        )
        return [parse_plan(resource) for resource in resources]

    def list_visibilities(
        self,
        plan_guid: str,
        organization_guid: str | None = None,
    ) -> list[Visibility]:
        query = f"service_plan_guid:{plan_guid}"
        if organization_guid:
            query += f";organization_guid:{organization_guid}"
        resources = asyncio.run(self._list(VISIBILITIES_PATH, VisibilityEntity, query=query))
        return [parse_visibility(resource) for resource in resources]

    def create_visibility(self, plan_guid: str, organization_guid: str) -> Visibility:
        resource = asyncio.run(
            self._call(
                "POST",
                VISIBILITIES_PATH,
                json={"service_plan_guid": plan_guid, "organization_guid": organization_guid},
                expected=(201,),
                model=Resource[VisibilityEntity],
            )
        )
        return parse_visibility(resource)

    def delete_visibility(self, visibility_guid: str) -> None:
        asyncio.run(
            self._call(
                "DELETE",
                f"{VISIBILITIES_PATH}/{visibility_guid}",
                params={"async": "false"},
                expected=(204,),
            )
        )

    def update_plan_public(self, plan_guid: str, public: bool) -> PlatformPlan:
        resource = asyncio.run(
            self._call(
                "PUT",
                f"{PLANS_PATH}/{plan_guid}",
                json={"public": public},
                expected=(201,),
                model=Resource[ServicePlanEntity],
            )
        )
        return parse_plan(resource)

    # -- transport -----------------------------------------------------------

    def _registration_body(self, name: str, broker_url: str) -> dict[str, str]:
        credentials = self._config.registration
        return {
            "name": name,
            "broker_url": broker_url,
            "auth_username": credentials.user,
            "auth_password": credentials.password,
        }

    async def _list(
        self,
        path: str,
        entity: type[CFBaseModel],
        *,
        query: str | None = None,
    ) -> list[Resource[Any]]:
        resources: list[Resource[Any]] = []
        params = {"q": query} if query is not None else None
        next_path: str | None = path
        async with self._client_factory(self._config.resilience) as client:
            while next_path is not None:
                page = await self._request(
                    client,
                    "GET",
                    next_path,
                    params=params,
                    expected=(200,),
                    model=Page[entity],  # type: ignore[valid-type]
                )
                resources.extend(page.resources)
                next_path = page.next_url
                params = None
        return resources

    async def _call(
        self,
        method: str,
        path: str,
        *,
        expected: Collection[int],
        json: object | None = None,
        params: dict[str, str] | None = None,
        model: type[BaseModel] | None = None,
    ) -> Any:
        async with self._client_factory(self._config.resilience) as client:
            return await self._request(
                client,
                method,
                path,
                json=json,
                params=params,
                expected=expected,
                model=model,
            )

    async def _request(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        expected: Collection[int],
        json: object | None = None,
        params: dict[str, str] | None = None,
        model: type[BaseModel] | None = None,
    ) -> Any:
        token = await self._access_token(client)
        headers = {"Authorization": f"Bearer {token}"}
        if json is None:
            response = await client.request(method, path, params=params, headers=headers)
        else:
            response = await client.request(
                method, path, params=params, json=json, headers=headers
            )

        if response.status_code not in expected:
            raise _api_error(method, path, response)
        if model is None:
            return None
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise CloudFoundryAPIError(
                f"error decoding response body of {method} {path}",
                status_code=response.status_code,
            ) from exc

    async def _access_token(self, client: ResilientClient) -> str:
        if self._token is not None and not self._token.expired():
            return self._token.value

        info_response = await client.get(INFO_PATH)
        if info_response.is_error:
            raise _api_error("GET", INFO_PATH, info_response)
        info = InfoResponse.model_validate_json(info_response.content)

        token_url = info.token_endpoint.rstrip("/") + "/oauth/token"
        token_response = await client.post(
            token_url,
            data={"grant_type": "client_credentials"},
            auth=httpx.BasicAuth(self._config.client_id, self._config.client_secret),
            headers={"Accept": "application/json"},
        )
        if token_response.is_error:
            raise _api_error("POST", token_url, token_response)
        token = TokenResponse.model_validate_json(token_response.content)

        expires_at = None
        if token.expires_in > 0:
            expires_at = time.monotonic() + max(
                token.expires_in - _TOKEN_EXPIRY_MARGIN_SECONDS, 0.0
            )
        self._token = _AccessToken(value=token.access_token, expires_at=expires_at)
        log.debug("Obtained Cloud Foundry access token")
        return self._token.value


def _api_error(method: str, path: str, response: httpx.Response) -> CloudFoundryAPIError:
    try:
        payload = ErrorResponse.model_validate_json(response.content)
    except ValidationError:
        payload = ErrorResponse(description=response.text)
    message = (
        f"{method} {path} failed with status {response.status_code}: "
        f"{payload.error_code or 'unknown'} {payload.description}".rstrip()
    )
    return CloudFoundryAPIError(
        message,
        status_code=response.status_code,
        code=payload.code,
        error_code=payload.error_code,
    )
