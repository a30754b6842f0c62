"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelflife.api.errors import register_exception_handlers
from shelflife.api.v1.router import api_v1_router
from shelflife.core.clock import Clock, init_clock
from shelflife.core.config import settings
from shelflife.core.database import close_database, init_database
from shelflife.core.logging_config import configure_logging, log_requests
from shelflife.db.seed import seed_if_empty

logger = logging.getLogger(__name__)


def create_app(
    database_url: str | None = None,
    clock: Clock | None = None,
    seed_demo_data: bool | None = None,
) -> FastAPI:
    """Build the application.

    The database handle and clock are created in the lifespan and live on
    ``app.state``; pass ``database_url``/``clock`` to substitute them.
    """
    seed = settings.SEED_DEMO_DATA if seed_demo_data is None else seed_demo_data

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application startup and shutdown lifecycle."""
        logger.info("Starting %s %s ...", settings.PROJECT_NAME, settings.VERSION)

        # Startup
        database = await init_database(app.state, database_url)
        logger.info("Database initialized at %s", database.engine.url.render_as_string(hide_password=True))

        if clock is not None:
            app.state.clock = clock
        else:
            init_clock(app.state, settings.REFERENCE_TIMEZONE)
        logger.info("Reference date is %s", app.state.clock.today().isoformat())

        if seed:
            async with database.session_factory() as session:
                added = await seed_if_empty(session)
                await session.commit()
            if added is None:
                logger.info("Catalog already has data, skipping seed")
            else:
                logger.info("Demo catalog seeded: %d product(s)", added)

        yield

        # Shutdown
        await close_database(app.state)
        logger.info("Database disconnected")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)
    app.include_router(api_v1_router, prefix=settings.API_PREFIX)
    return app


configure_logging(settings.LOG_LEVEL)
app = create_app()
