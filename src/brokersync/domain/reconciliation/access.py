"""Access-visibility reconciliation for services and plans.

Global decisions are expressed through the plan's ``public`` flag and clear
every organization grant first, so no leftover exception survives a global
change. Organization decisions only ever touch the single (plan, org) pair
and defer to the ``public`` flag when it already makes the plan reachable.

Any failing platform call aborts the rest of the access call.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from brokersync.domain.errors import CatalogLookupError

from .scope import parse_scope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from brokersync.domain.model import AccessScope, PlatformPlan, PlatformService
    from brokersync.domain.ports.visibility import VisibilityPlatform

log = getLogger(__name__)


@dataclass(slots=True)
class AccessVisibilityReconciler:
    """Decide and apply the minimal visibility mutations for an access request."""

    platform: VisibilityPlatform

    def enable_access_for_service(self, scope_payload: bytes, service_id: str) -> None:
        self.set_service_access(scope_payload, service_id, enabled=True)

    def disable_access_for_service(self, scope_payload: bytes, service_id: str) -> None:
        self.set_service_access(scope_payload, service_id, enabled=False)

    def enable_access_for_plan(self, scope_payload: bytes, plan_id: str) -> None:
        self.set_plan_access(scope_payload, plan_id, enabled=True)

    def disable_access_for_plan(self, scope_payload: bytes, plan_id: str) -> None:
        self.set_plan_access(scope_payload, plan_id, enabled=False)

    def set_service_access(self, scope_payload: bytes, service_id: str, *, enabled: bool) -> None:
        """Apply ``enabled`` to every plan of the service with catalog id ``service_id``."""

        scope = parse_scope(scope_payload)
        service = self._resolve_service(service_id)
        plans = self.platform.list_plans_for_service(service.guid)
        log.debug(
            "Updating access for service %s (%s plans): enabled=%s, scope=%s",
            service_id,
            len(plans),
            enabled,
            _describe_scope(scope),
        )
        self._apply(plans, scope, enabled=enabled)

    def set_plan_access(self, scope_payload: bytes, plan_id: str, *, enabled: bool) -> None:
        """Apply ``enabled`` to the plan with catalog id ``plan_id``."""

        scope = parse_scope(scope_payload)
        plan = self._resolve_plan(plan_id)
        log.debug(
            "Updating access for plan %s: enabled=%s, scope=%s",
            plan_id,
            enabled,
            _describe_scope(scope),
        )
        self._apply((plan,), scope, enabled=enabled)

    def _apply(self, plans: Iterable[PlatformPlan], scope: AccessScope, *, enabled: bool) -> None:
        for plan in plans:
            if scope.organization_guid:
                self._update_organization_visibility(plan, scope.organization_guid, enabled=enabled)
            else:
                self._update_public_flag(plan, enabled=enabled)

    def _update_public_flag(self, plan: PlatformPlan, *, enabled: bool) -> None:
        self._delete_visibilities(plan.guid)
        if plan.public == enabled:
            return
        log.info(f"Setting public={enabled} on plan guid={plan.guid} name={plan.name}")
        self.platform.update_plan_public(plan.guid, enabled)

    def _update_organization_visibility(
        self,
        plan: PlatformPlan,
        organization_guid: str,
        *,
        enabled: bool,
    ) -> None:
        if plan.public:
            log.info(
                "Plan with GUID = %s and NAME = %s is already public and therefore attempt to "
                "update access visibility for org with GUID = %s will be ignored",
                plan.guid,
                plan.name,
                organization_guid,
            )
            return
        if enabled:
            self.platform.create_visibility(plan.guid, organization_guid)
            return
        self._delete_visibilities(plan.guid, organization_guid)

    def _delete_visibilities(self, plan_guid: str, organization_guid: str | None = None) -> None:
        for visibility in self.platform.list_visibilities(plan_guid, organization_guid):
            self.platform.delete_visibility(visibility.guid)

    def _resolve_service(self, service_id: str) -> PlatformService:
        services = self.platform.find_services_by_unique_id(service_id)
        if len(services) != 1:
            raise CatalogLookupError("service", service_id, len(services))
        return services[0]

    def _resolve_plan(self, plan_id: str) -> PlatformPlan:
        plans = self.platform.find_plans_by_unique_id(plan_id)
        if len(plans) != 1:
            raise CatalogLookupError("plan", plan_id, len(plans))
        return plans[0]


def _describe_scope(scope: AccessScope) -> str:
    return "global" if scope.is_global else f"org_guid={scope.organization_guid}"

