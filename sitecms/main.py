"""
FastAPI Application
===================

Main FastAPI app setup with all routes, error handlers and middleware.
Starts: logging → appointment reminder job
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sitecms.api.v1 import (
    activities_router,
    appointments_router,
    auth_router,
    availability_router,
    categories_router,
    config_router,
    email_router,
    logs_router,
    menu_router,
    orders_router,
    pages_router,
    products_router,
    public_router,
    settings_router,
    social_networks_router,
)
from sitecms.application.services.reminder_scheduler import ReminderScheduler
from sitecms.core.config import get_settings
from sitecms.core.errors import AuthenticationError, ConcurrencyError, NotFoundError
from sitecms.core.log_config import configure_logging, shutdown_logging
from sitecms.di.container import get_container

logger = logging.getLogger(__name__)

SERVICE_NAME = "Site CMS API"
SERVICE_VERSION = "1.0.0"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


def register_exception_handlers(application: FastAPI) -> None:
    """
    Map application errors that escaped a controller to HTTP responses.

    Controllers translate the errors they expect themselves; these handlers
    keep the same mapping for everything else.
    """

    @application.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @application.exception_handler(ConcurrencyError)
    async def concurrency_handler(request: Request, exc: ConcurrencyError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @application.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, str(exc))

    @application.exception_handler(ValueError)
    async def validation_handler(request: Request, exc: ValueError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @application.exception_handler(Exception)
    async def unexpected_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - CORS middleware configuration
    - API route registration (auth, logs, admin and public routes)
    - Error handlers mapping application errors to status codes
    - Startup/shutdown event handlers for logging and the reminder job

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    application = FastAPI(
        title=SERVICE_NAME,
        description="Administration and public API for a small-business website",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    # Register API routers
    application.include_router(auth_router, prefix="/api/v1/auth")
    application.include_router(logs_router, prefix="/api/v1/logs")

    application.include_router(settings_router, prefix="/api/v1/admin/settings")
    application.include_router(social_networks_router, prefix="/api/v1/admin/social-networks")
    application.include_router(menu_router, prefix="/api/v1/admin/menu")
    application.include_router(pages_router, prefix="/api/v1/admin/pages")
    application.include_router(categories_router, prefix="/api/v1/admin/categories")
    application.include_router(products_router, prefix="/api/v1/admin/products")
    application.include_router(orders_router, prefix="/api/v1/admin/orders")
    application.include_router(activities_router, prefix="/api/v1/admin/activities")
    application.include_router(availability_router, prefix="/api/v1/admin/availability")
    application.include_router(appointments_router, prefix="/api/v1/admin/appointments")
    application.include_router(email_router, prefix="/api/v1/admin/email")
    application.include_router(config_router, prefix="/api/v1/admin/config")

    application.include_router(public_router, prefix="/api/v1/public")

    @application.on_event("startup")
    async def startup_event():
        """
        Startup sequence:
        1. Console and buffered file logging
        2. Appointment reminder job (when REMINDER_CHECK_INTERVAL_SECONDS > 0)
        """
        configure_logging(get_settings())
        get_container().get(ReminderScheduler).start()
        logger.info("%s %s started", SERVICE_NAME, SERVICE_VERSION)

    @application.on_event("shutdown")
    async def shutdown_event():
        """Stop the reminder job and flush buffered log entries."""
        await get_container().get(ReminderScheduler).stop()
        logger.info("%s stopped", SERVICE_NAME)
        shutdown_logging()

    @application.get("/")
    async def root():
        """Root endpoint - service description."""
        return {
            "status": "running",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "docs": "/docs"
        }

    @application.get("/health")
    async def health():
        """Health check endpoint, including the database connection."""
        database_ok = get_container().get("mongo_client").ping()
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "healthy" if database_ok else "degraded", "database": database_ok},
        )

    return application


# Create application instance
app = create_application()
