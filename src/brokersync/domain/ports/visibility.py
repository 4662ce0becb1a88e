"""Port for the platform primitives behind access reconciliation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from brokersync.domain.model import PlatformPlan, PlatformService, Visibility


@runtime_checkable
class VisibilityPlatform(Protocol):
    """Queries and mutations on platform services, plans and visibilities.

    Lookups by unique id return every match so that callers can reject
    absent or ambiguous mappings.
    """

    def find_services_by_unique_id(self, unique_id: str) -> list[PlatformService]: ...

    def find_plans_by_unique_id(self, unique_id: str) -> list[PlatformPlan]: ...

    def list_plans_for_service(self, service_guid: str) -> list[PlatformPlan]: ...

    def list_visibilities(
        self,
        plan_guid: str,
        organization_guid: str | None = None,
    ) -> list[Visibility]: ...

    def create_visibility(self, plan_guid: str, organization_guid: str) -> Visibility: ...

    def delete_visibility(self, visibility_guid: str) -> None: ...

    def update_plan_public(self, plan_guid: str, public: bool) -> PlatformPlan: ...


__all__ = ["VisibilityPlatform"]
