"""Restaurant record model."""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ("title", "address", "city")


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision.

    Returns:
        Timestamp such as ``2024-05-01T12:00:00.123Z``
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def missing_required_fields(payload: Any) -> list[str]:
    """List required fields that are absent or falsy in a payload.

    Args:
        payload: Decoded request body; anything but a mapping misses every field

    Returns:
        Missing field names, in ``REQUIRED_FIELDS`` order
    """
    if not isinstance(payload, Mapping):
        return list(REQUIRED_FIELDS)
    return [field for field in REQUIRED_FIELDS if not payload.get(field)]


class RestaurantRecord(BaseModel):
    """A received restaurant submission plus server-assigned metadata.

    Fields beyond the declared ones are kept verbatim from the payload.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., description="Server-assigned record id")
    received_at: str = Field(..., description="When the record was received")
    title: Any = Field(..., description="Restaurant name")
    address: Any = Field(..., description="Street address")
    city: Any = Field(..., description="City")

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any], record_id: str, received_at: str
    ) -> "RestaurantRecord":
        """Build a record; server-assigned keys override payload keys."""
        return cls.model_validate(
            {**payload, "id": record_id, "received_at": received_at}
        )

    def field(self, name: str, default: Any = None) -> Any:
        """Look up a declared or extra field by name."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)
