"""Statistics, demo seeding, expiry preview and route index endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Request
from fastapi.routing import APIRoute
from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.core.clock import Clock, get_clock
from shelflife.core.database import get_db
from shelflife.db.seed import DEMO_PRODUCTS, seed_demo_products
from shelflife.schemas.system import ApiIndex, DemoSeedResult, ExpiryPreview, StatsResponse
from shelflife.services.catalog import CatalogStore
from shelflife.services.expiry import classify, parse_iso_date
from shelflife.services.inventory import InventoryStore

router = APIRouter(tags=["system"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> StatsResponse:
    """Counts of products, records and currently flagged records."""
    today = clock.today()
    inventory = InventoryStore(db)
    return StatsResponse(
        products=await CatalogStore(db).count(),
        records=await inventory.count(),
        expiring=await inventory.count_expiring(today),
        reference_date=today,
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/initialize-demo", response_model=DemoSeedResult)
async def initialize_demo(db: AsyncSession = Depends(get_db)) -> DemoSeedResult:
    """Load the demo catalog. SKUs that already exist are left alone."""
    added = await seed_demo_products(db)
    return DemoSeedResult(
        message=f"Initialized {added} demo product(s)",
        added=added,
        products=DEMO_PRODUCTS,
    )


@router.get("/expiry/calculate", response_model=ExpiryPreview)
async def calculate_expiry(
    production_date: str = Query(..., description="YYYY-MM-DD"),
    shelf_life: int = Query(..., gt=0),
    reminder_days: int = Query(..., ge=0),
    as_of: str | None = Query(None, description="Reference date YYYY-MM-DD, defaults to today"),
    clock: Clock = Depends(get_clock),
) -> ExpiryPreview:
    """Classify a batch without storing it."""
    produced = parse_iso_date(production_date)
    reference = parse_iso_date(as_of) if as_of else clock.today()
    result = classify(produced, shelf_life, reminder_days, reference)
    return ExpiryPreview(
        production_date=produced,
        shelf_life=shelf_life,
        reminder_days=reminder_days,
        reference_date=reference,
        expiry_date=result.expiry_date,
        reminder_date=result.reminder_date,
        remaining_days=result.remaining_days,
        status=result.status,
        shelf_life_remaining_pct=result.shelf_life_remaining_pct,
    )


@router.get("/test", response_model=ApiIndex)
async def api_index(request: Request) -> ApiIndex:
    """Confirm the API is up and list every route it serves."""
    endpoints = sorted(
        f"{method} {route.path}"
        for route in request.app.routes
        if isinstance(route, APIRoute)
        for method in route.methods
    )
    return ApiIndex(
        message="API is running",
        timestamp=datetime.now(timezone.utc),
        endpoints=endpoints,
    )
