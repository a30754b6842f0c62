"""Demo catalog covering chilled, dry-goods, beverage and snack products."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.schemas.product import ProductCreate
from shelflife.services.catalog import CatalogStore

logger = logging.getLogger(__name__)

DEMO_PRODUCTS: list[dict[str, str | int]] = [
    {"sku": "10001", "name": "Whole Milk", "shelf_life": 180, "reminder_days": 7, "location": "Chilled row 1"},
    {"sku": "10002", "name": "Yoghurt", "shelf_life": 21, "reminder_days": 3, "location": "Chilled row 2"},
    {"sku": "20001", "name": "Biscuits", "shelf_life": 365, "reminder_days": 30, "location": "Dry goods row 2"},
    {"sku": "30001", "name": "Mineral Water", "shelf_life": 540, "reminder_days": 60, "location": "Beverages row 1"},
    {"sku": "40001", "name": "Chocolate", "shelf_life": 365, "reminder_days": 30, "location": "Snacks row 3"},
]


async def seed_demo_products(session: AsyncSession) -> int:
    """Add the demo products whose SKU is not yet in the catalog.

    Returns:
        Number of products added.
    """
    store = CatalogStore(session)
    added = 0
    for item in DEMO_PRODUCTS:
        definition = ProductCreate.model_validate(item)
        if await store.get(definition.sku) is not None:
            continue
        await store.add(definition)
        added += 1
    logger.info("Seeded %d demo product(s)", added)
    return added


async def seed_if_empty(session: AsyncSession) -> int | None:
    """Seed demo products only if the catalog is empty.

    Returns:
        Number of products seeded, None if the catalog already has data.
    """
    if await CatalogStore(session).count() > 0:
        return None
    return await seed_demo_products(session)
