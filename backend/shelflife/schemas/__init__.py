"""Pydantic v2 schemas for request/response validation."""

from shelflife.schemas.product import (
    ChangeResult,
    ProductCreate,
    ProductCreated,
    ProductResponse,
    ProductUpdate,
)
from shelflife.schemas.record import (
    ClassifiedRecordResponse,
    RecordCreate,
    RecordCreated,
    RecordResponse,
    RecordSnapshot,
)
from shelflife.schemas.system import (
    ApiIndex,
    DemoSeedResult,
    ExpiryPreview,
    HealthResponse,
    StatsResponse,
)

__all__ = [
    "ApiIndex",
    "ChangeResult",
    "ClassifiedRecordResponse",
    "DemoSeedResult",
    "ExpiryPreview",
    "HealthResponse",
    "ProductCreate",
    "ProductCreated",
    "ProductResponse",
    "ProductUpdate",
    "RecordCreate",
    "RecordCreated",
    "RecordResponse",
    "RecordSnapshot",
    "StatsResponse",
]
