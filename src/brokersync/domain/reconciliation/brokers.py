"""Reconciliation of proxy broker registrations on the platform.

One pass lists the registrations on the platform and the brokers in the
registry, creates a proxy registration for every registry broker that lacks
one, refreshes the catalog of the ones that exist, enables access for their
services and finally deletes registrations the registry no longer wants.

Only the two listings are fatal to a pass. Every per-broker operation is
isolated: a failure is logged and the loop moves on to the next broker.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from brokersync.domain.errors import BrokerListingError
from brokersync.domain.model import (
    GLOBAL_SCOPE_PAYLOAD,
    CreateBrokerRequest,
    DeleteBrokerRequest,
)
from brokersync.domain.ports.platform import AccessController, CatalogFetcher

from .identity import (
    PROXY_BROKER_PREFIX,
    correlation_id,
    describe_broker,
    describe_service,
    is_managed,
    proxy_broker_name,
    proxy_broker_url,
)
from .tracking import RunTracker

if TYPE_CHECKING:
    from brokersync.domain.model import DesiredBroker, RegisteredBroker
    from brokersync.domain.ports.platform import PlatformRegistry
    from brokersync.domain.ports.registry import BrokerSource

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationSettings:
    """Naming inputs for proxy registrations.

    ``proxy_path`` is the base URL under which the proxy serves brokers;
    registrations whose URL starts with it are owned by this system.
    """

    proxy_path: str
    broker_prefix: str = PROXY_BROKER_PREFIX
    allow_overlap: bool = False


@dataclass(slots=True)
class ReconciliationResult:
    """Outcome of one reconciliation pass."""

    created: list[str] = field(default_factory=list[str])
    fetched: list[str] = field(default_factory=list[str])
    deleted: list[str] = field(default_factory=list[str])
    access_updated: list[str] = field(default_factory=list[str])
    failures: int = 0
    aborted: bool = False
    skipped: bool = False


class ReconciliationTask:
    """Keep proxy registrations on the platform in line with the registry."""

    def __init__(
        self,
        *,
        source: BrokerSource,
        platform: PlatformRegistry,
        settings: ReconciliationSettings,
        access: AccessController | None = None,
        tracker: RunTracker | None = None,
    ) -> None:
        self.source = source
        self.platform = platform
        self.settings = settings
        self.access = access
        self.tracker = tracker or RunTracker()
        self._single_flight = threading.Lock()

    def run(self) -> ReconciliationResult:
        """Execute one pass. Failures are logged, never raised."""

        exclusive = not self.settings.allow_overlap
        if exclusive and not self._single_flight.acquire(blocking=False):
            log.warning("Reconciliation pass already in flight, skipping this invocation")
            return ReconciliationResult(skipped=True)
        try:
            return self._tracked_run()
        finally:
            if exclusive:
                self._single_flight.release()

    def _tracked_run(self) -> ReconciliationResult:
        log.debug("STARTING scheduled reconciliation task...")
        with self.tracker.track():
            result = ReconciliationResult()
            try:
                self._run(result)
            except BrokerListingError:
                log.exception("Reconciliation pass aborted")
                result.aborted = True
            except Exception:
                log.exception("Unexpected error during reconciliation pass")
                result.aborted = True
        log.debug(
            "FINISHED scheduled reconciliation task: created=%s, fetched=%s, deleted=%s, "
            "access_updated=%s, failures=%s, aborted=%s",
            len(result.created),
            len(result.fetched),
            len(result.deleted),
            len(result.access_updated),
            result.failures,
            result.aborted,
        )
        return result

    def _run(self, result: ReconciliationResult) -> None:
        registered = self._get_brokers_from_platform()
        desired = self._get_brokers_from_source()

        existing = {correlation_id(broker.broker_url): broker for broker in registered}
        for broker in desired:
            match = existing.pop(broker.id, None)
            if match is None:
                succeeded = self._create_broker_registration(broker, result)
            else:
                succeeded = self._fetch_broker_catalog(match, result)
            if succeeded:
                self._enable_service_access(broker, result)

        for orphan in existing.values():
            self._delete_broker_registration(orphan, result)

    def _get_brokers_from_platform(self) -> list[RegisteredBroker]:
        log.debug("Getting proxy brokers from platform...")
        try:
            brokers = self.platform.get_brokers()
        except Exception as exc:
            raise BrokerListingError("error getting brokers from platform") from exc

        managed: list[RegisteredBroker] = []
        for broker in brokers:
            if not is_managed(broker, self.settings.proxy_path):
                continue
            log.debug("FOUND registered proxy broker %s", describe_broker(broker))
            managed.append(broker)
        log.debug(f"SUCCESSFULLY retrieved {len(managed)} proxy brokers from platform")
        return managed

    def _get_brokers_from_source(self) -> list[DesiredBroker]:
        log.debug("Getting brokers from registry...")
        try:
            brokers = list(self.source.get_brokers())
        except Exception as exc:
            raise BrokerListingError("error getting brokers from registry") from exc
        log.debug(f"SUCCESSFULLY retrieved {len(brokers)} brokers from registry")
        return brokers

    def _create_broker_registration(
        self,
        broker: DesiredBroker,
        result: ReconciliationResult,
    ) -> bool:
        request = CreateBrokerRequest(
            name=proxy_broker_name(self.settings.broker_prefix, broker.id),
            broker_url=proxy_broker_url(self.settings.proxy_path, broker.id),
        )
        log.info("Attempting to create proxy for broker id=%s in platform...", broker.id)
        try:
            created = self.platform.create_broker(request)
        except Exception:
            log.exception("Error during creation of proxy for broker id=%s", broker.id)
            result.failures += 1
            return False
        log.info(
            "SUCCESSFULLY created proxy for broker %s at platform under name [%s] accessible at [%s]",
            describe_broker(created),
            request.name,
            request.broker_url,
        )
        result.created.append(broker.id)
        return True

    def _fetch_broker_catalog(
        self,
        broker: RegisteredBroker,
        result: ReconciliationResult,
    ) -> bool:
        if not isinstance(self.platform, CatalogFetcher):
            return True
        log.debug("Refetching catalog for broker %s", describe_broker(broker))
        try:
            self.platform.fetch(broker)
        except Exception:
            log.exception("Error during fetching catalog for broker %s", describe_broker(broker))
            result.failures += 1
            return False
        log.debug("SUCCESSFULLY refetched catalog for broker %s", describe_broker(broker))
        result.fetched.append(broker.guid)
        return True

    def _enable_service_access(self, broker: DesiredBroker, result: ReconciliationResult) -> None:
        controller = self._access_controller()
        if controller is None:
            return
        log.info("Attempting to enable service access for broker id=%s...", broker.id)
        if broker.catalog is None:
            log.error(
                "Error enabling service access for broker id=%s due to missing catalog details",
                broker.id,
            )
            result.failures += 1
            return

        for service in broker.catalog.services:
            log.debug("Enabling service access for service %s", describe_service(service))
            try:
                controller.enable_access_for_service(GLOBAL_SCOPE_PAYLOAD, service.id)
            except Exception:
                log.exception(
                    "Error enabling service access for service with ID=%s (%s)",
                    service.id,
                    describe_service(service),
                )
                result.failures += 1
                continue
            result.access_updated.append(service.id)
        log.info("Finished enabling service access for broker id=%s", broker.id)

    def _delete_broker_registration(
        self,
        broker: RegisteredBroker,
        result: ReconciliationResult,
    ) -> None:
        log.info("Attempting to delete broker %s from platform...", describe_broker(broker))
        request = DeleteBrokerRequest(guid=broker.guid, name=broker.name)
        try:
            self.platform.delete_broker(request)
        except Exception:
            log.exception("Error during deletion of broker %s", describe_broker(broker))
            result.failures += 1
            return
        log.info("SUCCESSFULLY deleted proxy broker from platform with name [%s]", request.name)
        result.deleted.append(broker.guid)

    def _access_controller(self) -> AccessController | None:
        if self.access is not None:
            return self.access
        if isinstance(self.platform, AccessController):
            return self.platform
        return None
