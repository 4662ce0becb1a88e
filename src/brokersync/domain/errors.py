"""Error types raised by the reconciliation core and its adapters."""

from __future__ import annotations


class BrokerSyncError(RuntimeError):
    """Base class for reconciliation failures."""


class BrokerListingError(BrokerSyncError):
    """Raised when a bulk broker listing cannot be obtained."""


class PlatformError(BrokerSyncError):
    """Raised when the target platform rejects a call."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RegistryAPIError(BrokerSyncError):
    """Raised when the central registry returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogLookupError(BrokerSyncError):
    """Raised when a catalog identifier maps to zero or several platform entities."""

    def __init__(self, kind: str, unique_id: str, matches: int) -> None:
        subject = f"zero {kind}s" if matches == 0 else f"more than one {kind}"
        super().__init__(f"{subject} with catalog {kind} GUID = {unique_id} found")
        self.kind = kind
        self.unique_id = unique_id
        self.matches = matches


class ScopePayloadError(BrokerSyncError, ValueError):
    """Raised when an access scope payload cannot be parsed."""
