"""Data models for the restaurant mock API."""

from restaurant_mock.models.responses import (
    CreateRestaurantResponse,
    RestaurantEcho,
    RestaurantListResponse,
    StatsResponse,
)
from restaurant_mock.models.restaurant import (
    REQUIRED_FIELDS,
    RestaurantRecord,
    missing_required_fields,
    utc_timestamp,
)

__all__ = [
    "REQUIRED_FIELDS",
    "CreateRestaurantResponse",
    "RestaurantEcho",
    "RestaurantListResponse",
    "RestaurantRecord",
    "StatsResponse",
    "missing_required_fields",
    "utc_timestamp",
]
