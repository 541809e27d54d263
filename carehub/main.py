"""carehub - Operations console for recovery and transitional housing."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from carehub.core.config import settings
from carehub.core.db_client import DatabaseError, RecordStore
from carehub.core.errors import classify_error_with_response
from carehub.core.logging import configure_logfire, instrument_fastapi
from carehub.core.seed import seed_demo_data
from carehub.interface.appointments_router import router as appointments_router
from carehub.interface.dashboard_router import router as dashboard_router
from carehub.interface.houses_router import router as houses_router
from carehub.interface.inventory_router import router as inventory_router
from carehub.interface.maintenance_router import router as maintenance_router
from carehub.interface.members_router import router as members_router
from carehub.interface.work_orders_router import router as work_orders_router


logger = logging.getLogger(__name__)

API_ROUTERS = (
    houses_router,
    members_router,
    work_orders_router,
    appointments_router,
    maintenance_router,
    inventory_router,
    dashboard_router,
)


async def handle_service_error(request: Request, exc: Exception) -> JSONResponse:
    """Turn a service exception into a structured JSON error."""
    error = classify_error_with_response(exc)
    logger.warning(
        "request_failed",
        extra={"path": request.url.path, "code": error.code, "error": str(exc)},
    )
    return JSONResponse(content=error.model_dump(mode="json"), status_code=error.http_status)


def register_error_handlers(app: FastAPI) -> None:
    """Map store and rule violations to HTTP errors."""
    app.add_exception_handler(DatabaseError, handle_service_error)
    app.add_exception_handler(ValueError, handle_service_error)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    app.state.store = RecordStore()
    if settings.seed_demo_data:
        await seed_demo_data(app.state.store)
    logger.info("Record store initialized", extra={"seeded": settings.seed_demo_data})

    yield
    # Shutdown
    logger.info("Record store discarded")


app = FastAPI(
    title=settings.app_name,
    description="Operations console for recovery and transitional housing",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

register_error_handlers(app)

# Register routers
for api_router in API_ROUTERS:
    app.include_router(api_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
