"""
FastAPI Application Entry Point

Daddy's Cook House backend.

Endpoints:
    - POST /register: Create an account, send a welcome email
    - POST /login: Check credentials, send a login alert
    - POST /submit-order: Store an order, alert the kitchen mailbox
    - GET /health: System health check

Run with ``cookhouse`` (console script) or ``python -m cookhouse.main``.
Missing configuration or an unreachable database stops the process.

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import logging
import sys
from datetime import datetime
from typing import Any, Optional
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cookhouse.core.config import Settings, get_settings, missing_settings, setup_logging
from cookhouse.core.deps import get_app_settings, get_mail_transport as mail_transport_dep, get_store
from cookhouse.core.security import PasswordHasher
from cookhouse.database import Database
from cookhouse.exceptions import CookHouseError
from cookhouse.routes import INTERNAL_ERROR, VALIDATION_MESSAGES, envelope, router
from cookhouse.schemas import HealthResponse
from cookhouse.services.notifications import (
    BaseMailTransport,
    build_dispatcher,
    get_mail_transport,
)
from cookhouse.services.store import StoreGateway

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    try:
        await database.connect()
    except Exception as e:
        logger.critical(f"❌ Database connection failed: {e}")
        await database.dispose()
        raise
    logger.info("✅ Database initialized")
    logger.info(f"✅ Mail Transport: {app.state.mail_transport.provider_name}")

    problems = settings.validate_production_config()
    if problems:
        logger.warning(f"⚠️ Suspicious production config: {problems}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await database.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

system_router = APIRouter()


@system_router.get("/", tags=["Root"])
async def root(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """API root with navigation links."""
    return {
        "message": f"🍛 Welcome to {settings.restaurant_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@system_router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    store: StoreGateway = Depends(get_store),
    transport: BaseMailTransport = Depends(mail_transport_dep),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """Verify the store and the mail transport are reachable."""

    db_status = "healthy"
    try:
        await store.ping()
    except CookHouseError as e:
        db_status = f"unhealthy: {e}"
        logger.error(f"Database health check failed: {e}")

    try:
        mail_ok = await asyncio.wait_for(
            transport.health_check(), timeout=settings.mail_timeout_seconds
        )
    except asyncio.TimeoutError:
        logger.warning(
            f"Mail health check timed out after {settings.mail_timeout_seconds}s"
        )
        mail_ok = False
    mail_status = "healthy" if mail_ok else "unhealthy"

    overall = "operational" if db_status == mail_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        mail=mail_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer schema failures with the route's fixed 400 message."""
    message = VALIDATION_MESSAGES.get(request.url.path)
    if message is None:
        return await request_validation_exception_handler(request, exc)

    # Field locations only; inputs may contain passwords
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.info(f"Rejected {request.url.path}: invalid {fields}")
    return envelope(400, False, message)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    kind = exc.kind.value if isinstance(exc, CookHouseError) else "unknown"
    logger.exception(f"Unhandled exception ({kind}) on {request.url.path}: {exc}")
    return envelope(500, False, INTERNAL_ERROR)


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    mail_transport: Optional[BaseMailTransport] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application and its long-lived collaborators.

    Args:
        settings: Configuration (defaults to ``get_settings()``)
        mail_transport: Outbound mail (defaults to the ENV_MODE choice)
        database: Store connection pool (defaults to ``settings.database_url``)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Registration, login and dish ordering for Daddy's Cook House.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    transport = mail_transport or get_mail_transport(settings)

    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=settings.debug)
    app.state.mail_transport = transport
    app.state.dispatcher = build_dispatcher(settings, transport)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(router)
    app.include_router(system_router)

    return app


# =============================================================================
# PROCESS ENTRY POINT
# =============================================================================

def run() -> None:
    """Validate configuration and serve until interrupted."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        missing = missing_settings(e)
        for name in missing:
            logger.critical(f"❌ Missing required environment variable: {name}")
        if not missing:
            logger.critical(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(debug=settings.debug)

    # uvicorn exits with a non-zero status when the lifespan startup fails
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
