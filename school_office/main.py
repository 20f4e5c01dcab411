"""School office back-office FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from school_office.core.audit.router import router as audit_router
from school_office.core.config import settings
from school_office.core.exceptions import AppException
from school_office.core.exceptions.handlers import (
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from school_office.core.logging_config import configure_logging
from school_office.core.store import get_store
from school_office.modules.dashboard.router import router as dashboard_router
from school_office.modules.fee_structures.router import router as fee_structures_router
from school_office.modules.invoices.router import router as invoices_router
from school_office.modules.payment_schedules.router import router as payment_schedules_router
from school_office.modules.students.router import router as students_router
from school_office.modules.users.router import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    store = get_store()
    logger.info(
        "%s back-office started (%d invoice(s) loaded)",
        settings.school_name,
        len(store.invoices),
    )
    yield
    # Shutdown
    logger.info("%s back-office stopped", settings.school_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging()

    app = FastAPI(
        title=f"{settings.school_name} Back-Office",
        description="Fee invoicing and administration for a school office",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Routers
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(students_router, prefix="/api/v1")
    app.include_router(invoices_router, prefix="/api/v1")
    app.include_router(fee_structures_router, prefix="/api/v1")
    app.include_router(payment_schedules_router, prefix="/api/v1")
    app.include_router(dashboard_router, prefix="/api/v1")
    app.include_router(audit_router, prefix="/api/v1")

    return app


app = create_app()
