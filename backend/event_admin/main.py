"""
Event Admin API - Main Application Entry Point

Serves:
- Event create / partial update with a whitelisted update builder
- Idempotent participant registration (write first, reconcile on conflict)
- An admin page for pushing typeform_config JSON onto an event
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from event_admin.core.config import get_settings
from event_admin.core.errors import ErrorKind, EventAdminError
from event_admin.core.logging import setup_logging, get_logger
from event_admin.core.metrics import metrics_endpoint
from event_admin.api.router import api_router
from event_admin.api.routes import admin
from event_admin.api.middleware import RequestLoggingMiddleware
from event_admin.db.session import engine

settings = get_settings()
logger = get_logger(__name__)

ERROR_STATUS = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.INPUT: 422,
    ErrorKind.WRITE: 400,
    ErrorKind.RECONCILIATION: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    yield

    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event records, typeform registration configs and idempotent registrations",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)

# Routes
app.include_router(api_router)
app.include_router(admin.router)


@app.exception_handler(EventAdminError)
async def event_admin_error_handler(request: Request, exc: EventAdminError):
    """Map writer errors onto HTTP responses."""
    if exc.kind is ErrorKind.RECONCILIATION:
        # Either extreme race timing or an inconsistent store: worth an alert
        logger.error("registration_reconciliation_failed", error=exc.message)
    else:
        logger.warning("request_rejected", kind=exc.kind.value, error=exc.message)
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"error": exc.message, "kind": exc.kind.value},
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    if not settings.METRICS_ENABLED:
        return JSONResponse(status_code=404, content={"detail": "Metrics disabled"})
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "admin": "/admin/events/update-config",
    }
