"""World Countries API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly, /countries routes before /regions and /health
    - Global error handlers map CountriesError → plain-text responses
    - CORS configured from settings (default: every origin, method and header)
    - Store initialized and seeded in the lifespan, before any request is served;
      a failure there aborts startup

Design Decisions:
    - OpenAPI document at /api-docs/openapi.json, Swagger UI at /swagger-ui/
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from world_countries.api.error_handlers import register_error_handlers
from world_countries.api.routes import countries, health, regions
from world_countries.config import get_settings
from world_countries.core.errors import StorageUnavailableError
from world_countries.db.seed_data import SEED_COUNTRIES
from world_countries.infrastructure.country_store import CountryStore
from world_countries.infrastructure.database import init_db
from world_countries.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

API_DESCRIPTION = "REST API providing information about countries around the world"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(settings.database_url)
    try:
        async with manager.session() as session:
            store = CountryStore(session)
            await store.initialize()
            if settings.seed_on_startup:
                await store.seed_if_empty(SEED_COUNTRIES)
    except StorageUnavailableError as e:
        logger.critical(
            f"Failed to initialize database: {e.message}",
            extra=e.to_log_extra(),
        )
        await manager.dispose()
        raise
    logger.info("World Countries API started")
    yield
    logger.info("World Countries API shutting down")
    await manager.dispose()


app = FastAPI(
    title="World Countries API",
    version="1.0.0",
    description=API_DESCRIPTION,
    contact={"name": "API Support", "email": "support@example.com"},
    license_info={"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
    openapi_tags=[
        {"name": "countries", "description": "API for accessing country information"},
        {"name": "health", "description": "Liveness and readiness probes"},
    ],
    openapi_url="/api-docs/openapi.json",
    docs_url="/swagger-ui/",
    redoc_url=None,
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(countries.router)
app.include_router(regions.router)
app.include_router(health.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    logger.info(f"Starting World Countries API at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
