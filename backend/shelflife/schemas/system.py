"""Health, statistics and expiry preview schemas."""

from datetime import date, datetime

from pydantic import BaseModel

from shelflife.services.expiry import ExpiryStatus


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    database: str


class StatsResponse(BaseModel):
    products: int
    records: int
    expiring: int
    reference_date: date
    timestamp: datetime


class DemoSeedResult(BaseModel):
    success: bool = True
    message: str
    added: int
    products: list[dict[str, str | int]]


class ExpiryPreview(BaseModel):
    """Classification of a hypothetical batch, without storing anything."""

    production_date: date
    shelf_life: int
    reminder_days: int
    reference_date: date
    expiry_date: date
    reminder_date: date
    remaining_days: int
    status: ExpiryStatus
    shelf_life_remaining_pct: float


class ApiIndex(BaseModel):
    """Liveness message plus the routes this API serves."""

    message: str
    timestamp: datetime
    endpoints: list[str]
