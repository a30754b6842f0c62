"""Production record Pydantic schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from shelflife.core.exceptions import DateError
from shelflife.models.product import SKU_LENGTH
from shelflife.services.expiry import Classification, ExpiryStatus, parse_iso_date

SNAPSHOT_FIELDS = ("name", "shelf_life", "reminder_days", "location")


class RecordCreate(BaseModel):
    """Schema for adding a production record.

    Only sku and production_date are required. Snapshot fields left out are
    copied from the product definition.
    """

    sku: str = Field(..., min_length=SKU_LENGTH, max_length=SKU_LENGTH)
    production_date: date
    name: str | None = Field(default=None, min_length=1, max_length=200)
    shelf_life: int | None = Field(default=None, gt=0)
    reminder_days: int | None = Field(default=None, ge=0)
    location: str | None = Field(default=None, min_length=1, max_length=200)

    @field_validator("production_date", mode="before")
    @classmethod
    def _strict_iso_date(cls, value: Any) -> date:
        try:
            return parse_iso_date(value)
        except DateError as exc:
            raise ValueError(exc.message) from exc

    @model_validator(mode="after")
    def _reminder_within_shelf_life(self) -> "RecordCreate":
        if (
            self.shelf_life is not None
            and self.reminder_days is not None
            and self.reminder_days > self.shelf_life
        ):
            raise ValueError("reminder_days must not exceed shelf_life")
        return self

    def missing_snapshot_fields(self) -> list[str]:
        return [name for name in SNAPSHOT_FIELDS if getattr(self, name) is None]


class RecordSnapshot(BaseModel):
    """Complete denormalized record as written to the inventory store."""

    sku: str
    production_date: date
    name: str
    shelf_life: int
    reminder_days: int
    location: str


class RecordCreated(BaseModel):
    success: bool = True
    id: int
    message: str = "Production record created"


class RecordResponse(BaseModel):
    """Stored production record fields."""

    id: int
    sku: str
    name: str
    production_date: date
    shelf_life: int
    reminder_days: int
    location: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ClassifiedRecordResponse(RecordResponse):
    """Production record with its expiry classification at the reference date."""

    expiry_date: date
    reminder_date: date
    remaining_days: int
    status: ExpiryStatus
    shelf_life_remaining_pct: float

    @classmethod
    def build(cls, record: Any, classification: Classification) -> "ClassifiedRecordResponse":
        return cls(
            id=record.id,
            sku=record.sku,
            name=record.name,
            production_date=record.production_date,
            shelf_life=record.shelf_life,
            reminder_days=record.reminder_days,
            location=record.location,
            created_at=record.created_at,
            expiry_date=classification.expiry_date,
            reminder_date=classification.reminder_date,
            remaining_days=classification.remaining_days,
            status=classification.status,
            shelf_life_remaining_pct=classification.shelf_life_remaining_pct,
        )
