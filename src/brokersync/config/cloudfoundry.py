"""Cloud Foundry configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_bool, optional_env_float, require_env_vars
from .http_resilience import ResilienceConfig

CF_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class RegistrationCredentials:
    """Basic-auth credentials the platform uses to call the proxy."""

    user: str
    password: str


@dataclass(frozen=True, slots=True)
class CloudFoundryConfig:
    api_address: str
    client_id: str
    client_secret: str
    registration: RegistrationCredentials
    resilience: ResilienceConfig


def get_cloudfoundry_config(*, resilience: ResilienceConfig | None = None) -> CloudFoundryConfig:
    values = require_env_vars(
        (
            "CF_API_ADDRESS",
            "CF_CLIENT_ID",
            "CF_CLIENT_SECRET",
            "CF_REG_USER",
            "CF_REG_PASSWORD",
        )
    )
    api_address = values["CF_API_ADDRESS"].rstrip("/")
    return CloudFoundryConfig(
        api_address=api_address,
        client_id=values["CF_CLIENT_ID"],
        client_secret=values["CF_CLIENT_SECRET"],
        registration=RegistrationCredentials(
            user=values["CF_REG_USER"],
            password=values["CF_REG_PASSWORD"],
        ),
        resilience=resilience
        or ResilienceConfig(
            name="cloudfoundry",
            base_url=api_address,
            timeout_seconds=optional_env_float("CF_REQUEST_TIMEOUT", CF_TIMEOUT_SECONDS),
            verify_ssl=not optional_env_bool("CF_SKIP_SSL_VALIDATION"),
        ),
    )
