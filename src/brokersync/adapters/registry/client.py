"""HTTP client for the broker registry API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from brokersync.adapters.http_resilience import ResilientClient
from brokersync.domain.errors import RegistryAPIError

from .schema import BrokersResponse
from .translator import parse_broker

if TYPE_CHECKING:
    from collections.abc import Callable

    from brokersync.config.http_resilience import ResilienceConfig
    from brokersync.config.registry import RegistryConfig
    from brokersync.domain.model import DesiredBroker

log = getLogger(__name__)

BROKERS_PATH = "/v1/service_brokers"


class RegistryClient:
    """Reads the desired broker set, catalogs included, from the registry."""

    def __init__(
        self,
        *,
        config: RegistryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    def get_brokers(self) -> list[DesiredBroker]:
        return asyncio.run(self._get_brokers_async())

    async def _get_brokers_async(self) -> list[DesiredBroker]:
        async with self._client_factory(self._config.resilience) as client:
            response = await client.get(
                self._config.url + BROKERS_PATH,
                params={"catalog": "true"},
                auth=httpx.BasicAuth(self._config.user, self._config.password),
            )

        if response.is_error:
            raise RegistryAPIError(
                f"StatusCode: {response.status_code} Body: {response.text}",
                status_code=response.status_code,
            )

        try:
            payload = BrokersResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise RegistryAPIError(
                "Failed to decode response body", status_code=response.status_code
            ) from exc

        brokers = [parse_broker(broker) for broker in payload.brokers]
        log.debug(f"Registry returned {len(brokers)} brokers")
        return brokers
