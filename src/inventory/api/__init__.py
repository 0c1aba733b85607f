"""Inventory domain API package."""

from inventory.api.routes import product_router

__all__ = ["product_router"]
