"""Parsing of access scope payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from brokersync.domain.errors import ScopePayloadError
from brokersync.domain.model import AccessScope


class ScopePayload(BaseModel):
    """Wire format of an access scope: ``{"org_guid": "..."}`` or ``{}``."""

    model_config = ConfigDict(extra="ignore", strict=True)

    org_guid: str | None = None

    @field_validator("org_guid", mode="after")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


def parse_scope(payload: bytes | str | None) -> AccessScope:
    """Decode ``payload`` into an :class:`AccessScope`.

    Empty payloads are treated as ``{}``. Anything that is not a JSON object
    with an optional string ``org_guid`` raises :class:`ScopePayloadError`.
    """

    if payload is None or not payload.strip():
        return AccessScope()
    try:
        parsed = ScopePayload.model_validate_json(payload)
    except ValidationError as exc:
        raise ScopePayloadError(f"Invalid access scope payload: {exc}") from exc
    return AccessScope(organization_guid=parsed.org_guid)
