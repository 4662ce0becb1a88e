"""Application configuration helpers."""

from __future__ import annotations

from .cloudfoundry import CloudFoundryConfig, RegistrationCredentials, get_cloudfoundry_config
from .env import (
    optional_env_bool,
    optional_env_float,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .proxy import ProxyConfig, get_proxy_config
from .registry import RegistryConfig, get_registry_config

__all__ = [
    "CloudFoundryConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "ProxyConfig",
    "RateLimit",
    "RegistrationCredentials",
    "RegistryConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "get_cloudfoundry_config",
    "get_proxy_config",
    "get_registry_config",
    "optional_env_bool",
    "optional_env_float",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
