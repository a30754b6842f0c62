"""SQLAlchemy ORM models."""

from shelflife.models.product import Product
from shelflife.models.record import ProductionRecord

__all__ = [
    "Product",
    "ProductionRecord",
]
