"""Central registry configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_bool, optional_env_float, require_env_vars
from .http_resilience import ResilienceConfig

REGISTRY_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Holds the location and credentials of the broker registry API."""

    url: str
    user: str
    password: str
    resilience: ResilienceConfig


def get_registry_config(*, resilience: ResilienceConfig | None = None) -> RegistryConfig:
    values = require_env_vars(
        ("BROKERSYNC_REGISTRY_URL", "BROKERSYNC_REGISTRY_USER", "BROKERSYNC_REGISTRY_PASSWORD")
    )
    url = values["BROKERSYNC_REGISTRY_URL"].rstrip("/")
    return RegistryConfig(
        url=url,
        user=values["BROKERSYNC_REGISTRY_USER"],
        password=values["BROKERSYNC_REGISTRY_PASSWORD"],
        resilience=resilience
        or ResilienceConfig(
            name="registry",
            base_url=url,
            timeout_seconds=optional_env_float(
                "BROKERSYNC_REGISTRY_REQUEST_TIMEOUT", REGISTRY_TIMEOUT_SECONDS
            ),
            verify_ssl=not optional_env_bool("BROKERSYNC_REGISTRY_SKIP_SSL_VALIDATION"),
        ),
    )
