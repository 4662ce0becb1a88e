"""Proxy and scheduling configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from brokersync.domain.reconciliation.identity import PROXY_BROKER_PREFIX, proxy_path_for

from .env import optional_env_float, optional_env_var, require_env_var
from .errors import ConfigurationError

DEFAULT_RESYNC_PERIOD_SECONDS = 60.0
DEFAULT_SHUTDOWN_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ProxyConfig:
    """Where the proxy is reachable and how often reconciliation runs."""

    url: str
    broker_prefix: str = PROXY_BROKER_PREFIX
    resync_period_seconds: float = DEFAULT_RESYNC_PERIOD_SECONDS
    shutdown_timeout_seconds: float = DEFAULT_SHUTDOWN_TIMEOUT_SECONDS

    @property
    def proxy_path(self) -> str:
        return proxy_path_for(self.url)


def get_proxy_config() -> ProxyConfig:
    url = require_env_var("BROKERSYNC_PROXY_URL").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"BROKERSYNC_PROXY_URL must be an http(s) URL, got {url!r}")
    # Broker URLs are built by appending to this value, so it must end in a path.
    if parsed.query or parsed.fragment or url.endswith(("?", "#")):
        raise ConfigurationError(
            f"BROKERSYNC_PROXY_URL must not carry a query or fragment, got {url!r}"
        )
    return ProxyConfig(
        url=url,
        broker_prefix=optional_env_var("BROKERSYNC_BROKER_PREFIX", PROXY_BROKER_PREFIX),
        resync_period_seconds=optional_env_float(
            "BROKERSYNC_RESYNC_PERIOD", DEFAULT_RESYNC_PERIOD_SECONDS
        ),
        shutdown_timeout_seconds=optional_env_float(
            "BROKERSYNC_SHUTDOWN_TIMEOUT", DEFAULT_SHUTDOWN_TIMEOUT_SECONDS
        ),
    )
