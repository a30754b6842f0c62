"""API v1 router aggregating all sub-routers."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from shelflife.api.v1.products import router as products_router
from shelflife.api.v1.records import router as records_router
from shelflife.api.v1.system import router as system_router
from shelflife.core.config import settings
from shelflife.schemas.system import HealthResponse

api_v1_router = APIRouter()


@api_v1_router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check reporting version and database reachability."""
    database = getattr(request.app.state, "database", None)
    reachable = database is not None and await database.ping()
    return HealthResponse(
        status="healthy" if reachable else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        database="ok" if reachable else "unavailable",
    )


api_v1_router.include_router(products_router)
api_v1_router.include_router(records_router)
api_v1_router.include_router(system_router)
