"""Production record API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.core.clock import Clock, get_clock
from shelflife.core.database import get_db
from shelflife.schemas.product import ChangeResult
from shelflife.schemas.record import (
    ClassifiedRecordResponse,
    RecordCreate,
    RecordCreated,
    RecordSnapshot,
)
from shelflife.services.catalog import CatalogStore
from shelflife.services.expiry import classify, parse_iso_date
from shelflife.services.inventory import InventoryStore

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", response_model=list[ClassifiedRecordResponse])
async def list_records(
    sku: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> list[ClassifiedRecordResponse]:
    """List production records, newest production first, optionally for one SKU."""
    store = InventoryStore(db)
    records = await store.list_by_sku(sku) if sku else await store.list_all()
    today = clock.today()
    return [
        ClassifiedRecordResponse.build(
            record, classify(record.production_date, record.shelf_life, record.reminder_days, today)
        )
        for record in records
    ]


@router.get("/expiring", response_model=list[ClassifiedRecordResponse])
async def list_expiring_records(
    as_of: str | None = Query(None, description="Reference date YYYY-MM-DD, defaults to today"),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> list[ClassifiedRecordResponse]:
    """List expired and expiring records, soonest to expire first."""
    reference = parse_iso_date(as_of) if as_of else clock.today()
    rows = await InventoryStore(db).list_expiring(reference)
    return [ClassifiedRecordResponse.build(row.record, row.classification) for row in rows]


@router.post("", response_model=RecordCreated)
async def create_record(
    payload: RecordCreate,
    db: AsyncSession = Depends(get_db),
) -> RecordCreated:
    """Add a production record.

    Snapshot fields missing from the request are copied from the product
    definition, so a client may send only sku and production_date.
    """
    values = payload.model_dump()
    missing = payload.missing_snapshot_fields()
    if missing:
        product = await CatalogStore(db).require(payload.sku)
        for field in missing:
            values[field] = getattr(product, field)

    record = await InventoryStore(db).add(RecordSnapshot(**values))
    return RecordCreated(id=record.id)


@router.delete("/{sku}/{production_date}", response_model=ChangeResult)
async def delete_record(
    sku: str,
    production_date: str,
    db: AsyncSession = Depends(get_db),
) -> ChangeResult:
    """Delete the record for (sku, production_date). Zero changes if absent."""
    changes = await InventoryStore(db).delete(sku, parse_iso_date(production_date))
    message = "Production record deleted" if changes else "No matching record"
    return ChangeResult(changes=changes, message=message)
