"""Product definition Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from shelflife.models.product import SKU_LENGTH


class ProductFields(BaseModel):
    """Mutable product definition fields."""

    name: str = Field(..., min_length=1, max_length=200)
    shelf_life: int = Field(..., gt=0, description="Days from production to expiry")
    reminder_days: int = Field(..., ge=0, description="Days before expiry that count as expiring")
    location: str = Field(..., min_length=1, max_length=200)

    @model_validator(mode="after")
    def _reminder_within_shelf_life(self) -> "ProductFields":
        if self.reminder_days > self.shelf_life:
            raise ValueError("reminder_days must not exceed shelf_life")
        return self


class ProductCreate(ProductFields):
    """Schema for creating a product."""

    sku: str = Field(..., min_length=SKU_LENGTH, max_length=SKU_LENGTH)


class ProductUpdate(ProductFields):
    """Schema for updating a product. The SKU is taken from the path."""


class ProductResponse(BaseModel):
    """Schema for product responses."""

    id: int
    sku: str
    name: str
    shelf_life: int
    reminder_days: int
    location: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductCreated(BaseModel):
    success: bool = True
    id: int
    sku: str
    message: str = "Product created"


class ChangeResult(BaseModel):
    """Outcome of an update or delete: how many rows were affected."""

    success: bool = True
    changes: int
    message: str
