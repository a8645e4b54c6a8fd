"""Pharmacy storefront: in-memory catalog, carts and reviews behind a FastAPI app."""

from .service import create_app
from .storage import CartUpdate, MemStorage

__all__ = ["CartUpdate", "MemStorage", "create_app"]
