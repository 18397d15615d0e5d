"""Services for the restaurant mock API."""

from restaurant_mock.services.restaurant_store import RestaurantStore, format_summary

__all__ = ["RestaurantStore", "format_summary"]
