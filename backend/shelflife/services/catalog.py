"""Catalog store for product definitions.

Provides:
- Ordered listing and lookup by SKU
- Add with duplicate-SKU detection (pre-check plus unique constraint)
- Update of the mutable fields (SKU is immutable)
- Delete without cascading to production records
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from shelflife.models.product import SKU_LENGTH, Product
from shelflife.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def validate_sku(sku: object) -> str:
    if not isinstance(sku, str) or len(sku) != SKU_LENGTH:
        raise ValidationError("sku", f"SKU must be a {SKU_LENGTH}-character code")
    return sku


def validate_limits(shelf_life: object, reminder_days: object) -> None:
    """Check ``shelf_life > 0`` and ``0 <= reminder_days <= shelf_life``.

    Raises:
        ValidationError: Naming the first offending field.
    """
    if isinstance(shelf_life, bool) or not isinstance(shelf_life, int) or shelf_life <= 0:
        raise ValidationError("shelf_life", "shelf_life must be a positive integer")
    if isinstance(reminder_days, bool) or not isinstance(reminder_days, int) or reminder_days < 0:
        raise ValidationError("reminder_days", "reminder_days must be a non-negative integer")
    if reminder_days > shelf_life:
        raise ValidationError("reminder_days", "reminder_days must not exceed shelf_life")


def validate_text(field: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, f"{field} must not be empty")


class CatalogStore:
    """Reads and writes product definitions through one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[Product]:
        result = await self.db.execute(select(Product).order_by(Product.sku))
        return list(result.scalars().all())

    async def get(self, sku: str) -> Product | None:
        result = await self.db.execute(select(Product).where(Product.sku == sku))
        return result.scalar_one_or_none()

    async def require(self, sku: str) -> Product:
        product = await self.get(sku)
        if product is None:
            raise NotFoundError("Product", sku)
        return product

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Product))
        return int(result.scalar_one())

    async def add(self, definition: ProductCreate) -> Product:
        """Insert a new product definition.

        Raises:
            ValidationError: If the definition violates its invariants.
            DuplicateKeyError: If the SKU is already in the catalog.
        """
        validate_sku(definition.sku)
        validate_text("name", definition.name)
        validate_text("location", definition.location)
        validate_limits(definition.shelf_life, definition.reminder_days)

        if await self.get(definition.sku) is not None:
            logger.warning("Rejected duplicate SKU %s", definition.sku)
            raise DuplicateKeyError(definition.sku)

        product = Product(
            sku=definition.sku,
            name=definition.name,
            shelf_life=definition.shelf_life,
            reminder_days=definition.reminder_days,
            location=definition.location,
        )
        self.db.add(product)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert; the constraint is authoritative
            await self.db.rollback()
            if await self.get(definition.sku) is not None:
                logger.warning("Unique constraint rejected SKU %s", definition.sku)
                raise DuplicateKeyError(definition.sku) from exc
            raise ValidationError("product", "Product violates a storage constraint", str(exc.orig)) from exc
        await self.db.refresh(product)
        logger.info("Added product %s (%s)", product.sku, product.name)
        return product

    async def update(self, sku: str, fields: ProductUpdate) -> int:
        """Replace the mutable fields of a product. Returns the changed count.

        Raises:
            ValidationError: If the new values violate the invariants.
            NotFoundError: If no product has this SKU.
        """
        validate_text("name", fields.name)
        validate_text("location", fields.location)
        validate_limits(fields.shelf_life, fields.reminder_days)

        product = await self.require(sku)
        product.name = fields.name
        product.shelf_life = fields.shelf_life
        product.reminder_days = fields.reminder_days
        product.location = fields.location

        await self.db.flush()
        logger.info("Updated product %s", sku)
        return 1

    async def delete(self, sku: str) -> int:
        """Remove a product definition. Existing production records are kept."""
        result = await self.db.execute(delete(Product).where(Product.sku == sku))
        changes = result.rowcount or 0
        logger.info("Deleted product %s (%d row(s))", sku, changes)
        return changes
