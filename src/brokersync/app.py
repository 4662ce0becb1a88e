"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from brokersync.adapters.cloudfoundry import CloudFoundryClient
from brokersync.adapters.registry import RegistryClient
from brokersync.config import get_cloudfoundry_config, get_proxy_config, get_registry_config
from brokersync.domain.ports.visibility import VisibilityPlatform
from brokersync.domain.reconciliation import (
    AccessVisibilityReconciler,
    ReconciliationSettings,
    ReconciliationTask,
)
from brokersync.scheduling import PeriodicScheduler

if TYPE_CHECKING:
    from brokersync.config import CloudFoundryConfig, ProxyConfig
    from brokersync.domain.ports.platform import AccessController, PlatformRegistry
    from brokersync.domain.ports.registry import BrokerSource
    from brokersync.domain.reconciliation import ReconciliationResult, RunTracker


log = getLogger(__name__)


def build_cloudfoundry_platform(
    *,
    config: CloudFoundryConfig | None = None,
) -> tuple[CloudFoundryClient, AccessVisibilityReconciler]:
    """Build the Cloud Foundry client and the access reconciler bound to it."""

    client = CloudFoundryClient(config=config or get_cloudfoundry_config())
    return client, AccessVisibilityReconciler(client)


def build_reconciliation_task(
    *,
    source: BrokerSource | None = None,
    platform: PlatformRegistry | None = None,
    access: AccessController | None = None,
    proxy: ProxyConfig | None = None,
    tracker: RunTracker | None = None,
) -> ReconciliationTask:
    """Wire the reconciliation task, falling back to the configured adapters."""

    effective_proxy = proxy or get_proxy_config()
    effective_source = source or RegistryClient(config=get_registry_config())
    if platform is None:
        platform, default_access = build_cloudfoundry_platform()
        access = access or default_access
    elif access is None and isinstance(platform, VisibilityPlatform):
        access = AccessVisibilityReconciler(platform)

    log.info(
        "Configured reconciliation: proxy_path=%s, broker_prefix=%s, access=%s",
        effective_proxy.proxy_path,
        effective_proxy.broker_prefix,
        type(access).__name__ if access is not None else None,
    )
    return ReconciliationTask(
        source=effective_source,
        platform=platform,
        settings=ReconciliationSettings(
            proxy_path=effective_proxy.proxy_path,
            broker_prefix=effective_proxy.broker_prefix,
        ),
        access=access,
        tracker=tracker,
    )


def reconcile_once(task: ReconciliationTask | None = None) -> ReconciliationResult:
    """Run a single reconciliation pass."""

    effective_task = task or build_reconciliation_task()
    return effective_task.run()


def build_scheduler(
    task: ReconciliationTask,
    *,
    interval_seconds: float,
    shutdown_timeout_seconds: float,
) -> PeriodicScheduler:
    return PeriodicScheduler(
        task.run,
        interval_seconds=interval_seconds,
        tracker=task.tracker,
        shutdown_timeout_seconds=shutdown_timeout_seconds,
    )
