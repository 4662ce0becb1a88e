"""Naming and correlation of proxy broker registrations.

A platform registration is owned by this system iff its broker URL starts
with the proxy base path. The registry id of the broker it proxies is the
last path segment of that URL; there is no other mapping between the two
collections.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from brokersync.domain.model import RegisteredBroker, Service

PROXY_BROKER_PREFIX: Final[str] = "sm-proxy-"
PROXY_API_PREFIX: Final[str] = "/v1/osb"


def is_managed(broker: RegisteredBroker, proxy_path: str) -> bool:
    # Prefix match only: any foreign registration under the same path counts as managed.
    return broker.broker_url.startswith(proxy_path)


def correlation_id(broker_url: str) -> str:
    """Return the registry broker id encoded in a proxy broker URL."""

    return broker_url[broker_url.rfind("/") + 1 :]


def proxy_broker_name(prefix: str, broker_id: str) -> str:
    return prefix + broker_id


def proxy_broker_url(proxy_path: str, broker_id: str) -> str:
    return f"{proxy_path}/{broker_id}"


def proxy_path_for(base_url: str) -> str:
    """Build the proxy base path served under ``base_url``."""

    return base_url.rstrip("/") + PROXY_API_PREFIX


def describe_broker(broker: RegisteredBroker) -> str:
    return f"broker_guid={broker.guid} broker_name={broker.name} broker_url={broker.broker_url}"


def describe_service(service: Service) -> str:
    return f"service_guid={service.id} service_name={service.name}"
