"""In-memory storage for received restaurant records."""

import logging
import time
from collections.abc import Mapping
from typing import Any

from restaurant_mock.models import RestaurantRecord, utc_timestamp

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW_LENGTH = 100


class RestaurantStore:
    """Append-only store of restaurant records for the lifetime of the server.

    Records are kept in insertion order and are never mutated or removed.
    Nothing is persisted; a new store starts empty.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._records: list[RestaurantRecord] = []
        self._last_id_ms = 0

    def generate_id(self) -> str:
        """Generate a time-based record identifier.

        The millisecond component never repeats within one store, even when
        two records arrive in the same millisecond.

        Returns:
            Identifier of the form ``rest_<epoch milliseconds>``
        """
        now_ms = time.time_ns() // 1_000_000
        self._last_id_ms = max(now_ms, self._last_id_ms + 1)
        return f"rest_{self._last_id_ms}"

    def add(
        self, payload: Mapping[str, Any], received_at: str | None = None
    ) -> RestaurantRecord:
        """Create a record from a validated payload and append it.

        Args:
            payload: Submitted restaurant fields
            received_at: Receipt timestamp (defaults to now)

        Returns:
            The stored record
        """
        record = RestaurantRecord.from_payload(
            payload,
            record_id=self.generate_id(),
            received_at=received_at or utc_timestamp(),
        )
        self._records.append(record)
        logger.debug(f"Stored restaurant {record.id} ({len(self._records)} total)")
        return record

    def list_recent(self) -> list[RestaurantRecord]:
        """Return all records, most recently added first.

        The returned list is a copy; the stored order is left untouched.
        """
        return list(reversed(self._records))

    def count(self) -> int:
        return len(self._records)


def format_summary(record: RestaurantRecord) -> list[str]:
    """Build the human-readable log lines for a received restaurant.

    Args:
        record: The stored record

    Returns:
        One line per summarized attribute
    """
    description = record.field("description")
    if description:
        description = f"{str(description)[:DESCRIPTION_PREVIEW_LENGTH]}..."

    images = record.field("images")
    if isinstance(images, list):
        image_count = len(images)
    else:
        image_count = 1 if images else 0

    return [
        f"   📍 {record.title} - {record.city}",
        f"   💰 {record.field('price_range') or 'N/A'}",
        f"   ⭐ {record.field('ratings') or 'N/A'} ({record.field('reviews') or 0} reviews)",
        f"   🌐 {record.field('website') or 'No website'}",
        f"   📝 Description: {description or 'N/A'}",
        f"   🖼️  Images: {image_count}",
    ]
