"""Response bodies returned by the mock API."""

from typing import Any

from pydantic import BaseModel, Field

from restaurant_mock.models.restaurant import RestaurantRecord


class RestaurantEcho(BaseModel):
    """Short echo of a processed restaurant."""

    title: Any
    city: Any
    status: str = "processed"


class CreateRestaurantResponse(BaseModel):
    """Body of a successful ``POST /restaurants``."""

    success: bool = True
    message: str = "Restaurant data received successfully"
    id: str = Field(..., description="Id of the new record")
    processed_at: str
    total_received: int = Field(..., description="Store size after the insert")
    data: RestaurantEcho


class RestaurantListResponse(BaseModel):
    """Body of ``GET /api/restaurants``."""

    total: int
    restaurants: list[RestaurantRecord] = Field(
        default_factory=list, description="Most recent first"
    )


class StatsResponse(BaseModel):
    """Body of ``GET /stats``."""

    server: str
    uptime: float = Field(..., description="Seconds since the server started")
    timestamp: str
    total_restaurants_received: int
    endpoints: list[str]
