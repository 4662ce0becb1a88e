from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from brokersync.adapters.cloudfoundry import CloudFoundryAPIError, CloudFoundryClient
from brokersync.adapters.http_resilience import ResilienceConfig, ResilientClient
from brokersync.config import CloudFoundryConfig, RegistrationCredentials
from brokersync.domain.model import (
    CreateBrokerRequest,
    DeleteBrokerRequest,
    RegisteredBroker,
)
from brokersync.domain.ports import CatalogFetcher, PlatformRegistry, VisibilityPlatform

API_ADDRESS = "https://api.cf.example.com"
UAA_ADDRESS = "https://uaa.cf.example.com"

Route = Callable[[httpx.Request], httpx.Response]


class FakeCloudFoundry:
    """Serves the info and token endpoints and dispatches API calls to routes."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []
        self.token_requests = 0
        self.token_status = 200

    def route(self, method: str, path: str, handler: Route) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v2/info":
            return httpx.Response(200, json={"token_endpoint": UAA_ADDRESS})
        if request.url.host == "uaa.cf.example.com":
            self.token_requests += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "unauthorized"})
            return httpx.Response(
                200,
                json={"access_token": "token-1", "token_type": "bearer", "expires_in": 3600},
            )
        self.requests.append(request)
        assert request.headers["Authorization"] == "Bearer token-1"
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"code": 10000, "error_code": "CF-NotFound"})
        return handler(request)

    def client_factory(self) -> Callable[[ResilienceConfig], ResilientClient]:
        async def async_handler(request: httpx.Request) -> httpx.Response:
            return self(request)

        def factory(resilience: ResilienceConfig) -> ResilientClient:
            client = ResilientClient(resilience)
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url=resilience.base_url or "",
                transport=httpx.MockTransport(async_handler),
            )
            return client

        return factory


def _resource(guid: str, **entity: object) -> dict[str, object]:
    return {"metadata": {"guid": guid, "url": f"/v2/things/{guid}"}, "entity": entity}


def _page(*resources: dict[str, object], next_url: str | None = None) -> dict[str, object]:
    return {"total_results": len(resources), "next_url": next_url, "resources": list(resources)}


@pytest.fixture
def server() -> FakeCloudFoundry:
    return FakeCloudFoundry()


@pytest.fixture
def client(server: FakeCloudFoundry) -> CloudFoundryClient:
    config = CloudFoundryConfig(
        api_address=API_ADDRESS,
        client_id="client",
        client_secret="client-secret",
        registration=RegistrationCredentials(user="proxy-user", password="proxy-password"),
        resilience=ResilienceConfig(name="cloudfoundry", base_url=API_ADDRESS),
    )
    return CloudFoundryClient(config=config, client_factory=server.client_factory())


def test_client_provides_every_platform_capability(client: CloudFoundryClient) -> None:
    assert isinstance(client, PlatformRegistry)
    assert isinstance(client, CatalogFetcher)
    assert isinstance(client, VisibilityPlatform)


def test_get_brokers_follows_pagination(
    server: FakeCloudFoundry,
    client: CloudFoundryClient,
) -> None:
    def brokers(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("page") == "2":
            return httpx.Response(
                200,
                json=_page(_resource("g2", name="sm-proxy-b2", broker_url="https://p/v1/osb/b2")),
            )
        return httpx.Response(
            200,
            json=_page(
                _resource("g1", name="sm-proxy-b1", broker_url="https://p/v1/osb/b1"),
                next_url="/v2/service_brokers?page=2",
            ),
        )

    server.route("GET", "/v2/service_brokers", brokers)

    result = client.get_brokers()

    assert result == [
        RegisteredBroker(guid="g1", name="sm-proxy-b1", broker_url="https://p/v1/osb/b1"),
        RegisteredBroker(guid="g2", name="sm-proxy-b2", broker_url="https://p/v1/osb/b2"),
    ]
    assert server.token_requests == 1


def test_token_is_reused_across_calls(server: FakeCloudFoundry, client: CloudFoundryClient) -> None:
    server.route("GET", "/v2/service_brokers", lambda _: httpx.Response(200, json=_page()))

    client.get_brokers()
    client.get_brokers()

    assert server.token_requests == 1


def test_create_broker_registers_with_proxy_credentials(
    server: FakeCloudFoundry,
    client: CloudFoundryClient,
) -> None:
    def create(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            201,
            json=_resource("new-guid", name=body["name"], broker_url=body["broker_url"]),
        )

    server.route("POST", "/v2/service_brokers", create)

    created = client.create_broker(
        CreateBrokerRequest(name="sm-proxy-b1", broker_url="https://p/v1/osb/b1")
    )

    assert created.guid == "new-guid"
    assert json.loads(server.requests[0].content) == {
        "name": "sm-proxy-b1",
        "broker_url": "https://p/v1/osb/b1",
        "auth_username": "proxy-user",
        "auth_password": "proxy-password",
    }


def test_fetch_reregisters_broker_unchanged(
    server: FakeCloudFoundry,
    client: CloudFoundryClient,
) -> None:
    broker = RegisteredBroker(guid="g1", name="sm-proxy-b1", broker_url="https://p/v1/osb/b1")

    def update(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json=_resource("g1", name=body["name"], broker_url=body["broker_url"]),
        )

    server.route("PUT", "/v2/service_brokers/g1", update)

    client.fetch(broker)

    body = json.loads(server.requests[0].content)
    assert body["name"] == broker.name
    assert body["broker_url"] == broker.broker_url
    assert body["auth_username"] == "proxy-user"


def test_delete_broker(server: FakeCloudFoundry, client: CloudFoundryClient) -> None:
    server.route("DELETE", "/v2/service_brokers/g1", lambda _: httpx.Response(204))

    client.delete_broker(DeleteBrokerRequest(guid="g1", name="sm-proxy-b1"))

    assert server.requests[0].method == "DELETE"


def test_find_plans_and_visibilities_use_filter_queries(
    server: FakeCloudFoundry,
    client: CloudFoundryClient,
) -> None:
    server.route(
        "GET",
        "/v2/service_plans",
        lambda _: httpx.Response(
            200,
            json=_page(
                _resource("p1", name="small", unique_id="plan-id", public=True, service_guid="s1")
            ),
        ),
    )
    server.route(
        "GET",
        "/v2/service_plan_visibilities",
        lambda _: httpx.Response(
            200,
            json=_page(_resource("v1", service_plan_guid="p1", organization_guid="o1")),
        ),
    )

    plans = client.find_plans_by_unique_id("plan-id")
    visibilities = client.list_visibilities("p1", "o1")

    assert plans[0].guid == "p1"
    assert plans[0].public is True
    assert plans[0].service_guid == "s1"
    assert visibilities[0].organization_guid == "o1"
    assert server.requests[0].url.params["q"] == "unique_id:plan-id"
    assert server.requests[1].url.params["q"] == "service_plan_guid:p1;organization_guid:o1"


def test_find_services_by_unique_id(server: FakeCloudFoundry, client: CloudFoundryClient) -> None:
    server.route(
        "GET",
        "/v2/services",
        lambda _: httpx.Response(200, json=_page(_resource("s1", label="db", unique_id="svc-id"))),
    )

    services = client.find_services_by_unique_id("svc-id")

    assert [(service.guid, service.name) for service in services] == [("s1", "db")]
    assert server.requests[0].url.params["q"] == "unique_id:svc-id"


def test_visibility_mutations(server: FakeCloudFoundry, client: CloudFoundryClient) -> None:
    server.route(
        "POST",
        "/v2/service_plan_visibilities",
        lambda _: httpx.Response(
            201, json=_resource("v9", service_plan_guid="p1", organization_guid="o1")
        ),
    )
    server.route("DELETE", "/v2/service_plan_visibilities/v9", lambda _: httpx.Response(204))
    server.route(
        "PUT",
        "/v2/service_plans/p1",
        lambda request: httpx.Response(
            201,
            json=_resource("p1", unique_id="plan-id", **json.loads(request.content)),
        ),
    )

    created = client.create_visibility("p1", "o1")
    client.delete_visibility(created.guid)
    plan = client.update_plan_public("p1", True)

    create_request, delete_request, update_request = server.requests
    assert json.loads(create_request.content) == {
        "service_plan_guid": "p1",
        "organization_guid": "o1",
    }
    assert delete_request.url.params["async"] == "false"
    assert json.loads(update_request.content) == {"public": True}
    assert plan.public is True


def test_error_payload_raises_api_error(server: FakeCloudFoundry, client: CloudFoundryClient) -> None:
    server.route(
        "POST",
        "/v2/service_brokers",
        lambda _: httpx.Response(
            400,
            json={
                "code": 270003,
                "error_code": "CF-ServiceBrokerNameTaken",
                "description": "The service broker name is taken",
            },
        ),
    )

    with pytest.raises(CloudFoundryAPIError) as exc:
        client.create_broker(CreateBrokerRequest(name="dup", broker_url="https://p/v1/osb/x"))

    assert exc.value.status_code == 400
    assert exc.value.code == 270003
    assert exc.value.error_code == "CF-ServiceBrokerNameTaken"
    assert "The service broker name is taken" in str(exc.value)


def test_token_failure_raises_api_error(server: FakeCloudFoundry, client: CloudFoundryClient) -> None:
    server.token_status = 401

    with pytest.raises(CloudFoundryAPIError) as exc:
        client.get_brokers()

    assert exc.value.status_code == 401
    assert server.requests == []
