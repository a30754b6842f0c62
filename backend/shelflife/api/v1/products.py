"""Product definition CRUD API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.core.database import get_db
from shelflife.models.product import Product
from shelflife.schemas.product import (
    ChangeResult,
    ProductCreate,
    ProductCreated,
    ProductResponse,
    ProductUpdate,
)
from shelflife.services.catalog import CatalogStore

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)) -> list[Product]:
    """List all product definitions ordered by SKU."""
    return await CatalogStore(db).list_all()


@router.get("/{sku}", response_model=ProductResponse)
async def get_product(sku: str, db: AsyncSession = Depends(get_db)) -> Product:
    """Get a single product definition by SKU."""
    return await CatalogStore(db).require(sku)


@router.post("", response_model=ProductCreated)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
) -> ProductCreated:
    """Add a product definition. 409 if the SKU already exists."""
    product = await CatalogStore(db).add(payload)
    return ProductCreated(id=product.id, sku=product.sku)


@router.put("/{sku}", response_model=ChangeResult)
async def update_product(
    sku: str,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
) -> ChangeResult:
    """Update name, shelf life, reminder window and location of a product."""
    changes = await CatalogStore(db).update(sku, payload)
    return ChangeResult(changes=changes, message="Product updated")


@router.delete("/{sku}", response_model=ChangeResult)
async def delete_product(sku: str, db: AsyncSession = Depends(get_db)) -> ChangeResult:
    """Delete a product definition. Production records are not touched."""
    changes = await CatalogStore(db).delete(sku)
    message = "Product deleted" if changes else "No matching product"
    return ChangeResult(changes=changes, message=message)
