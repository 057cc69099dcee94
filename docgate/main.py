"""
FastAPI Application Entry Point
Application factory with routes, middleware and exception handlers
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docgate.api import v1
from docgate.core.config import Settings, settings as default_settings
from docgate.core.exceptions import AppException
from docgate.core.logging import get_logger, setup_logging
from docgate.models.common import HealthResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan management"""
    config: Settings = app.state.settings
    logger.info(f"Starting {config.APP_NAME}...")
    logger.info(f"Environment: {config.ENVIRONMENT}")
    logger.info(f"Debug: {config.DEBUG}")

    # Startup
    try:
        from docgate.db.session import init_db
        from docgate.services.notification import create_sender
        from docgate.services.store import SQLPermissionStore

        session_maker = await init_db(config)
        app.state.store = SQLPermissionStore(session_maker, timeout=config.STORE_TIMEOUT_SECONDS)
        app.state.sender = create_sender(config)

        logger.info(f"Services initialized (email provider: {app.state.sender.provider_name})")

    except Exception as e:
        # Requests needing the store answer 503 until it is reachable
        logger.error(f"Failed to initialize services: {e}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    try:
        from docgate.db.session import close_db

        sender = getattr(app.state, "sender", None)
        if sender is not None:
            await sender.close()
        await close_db()

        logger.info("Shutdown complete")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
                "timestamp": exc.timestamp,
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": str(exc.detail).lower().replace(" ", "_"),
                "message": str(exc.detail),
                "timestamp": None,
            }
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation errors"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "validation_error",
                "message": "Invalid request parameters",
                "details": {"errors": jsonable_errors(exc)},
                "timestamp": None,
            }
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings structure"""
    config = config or default_settings
    setup_logging(config)

    application = FastAPI(
        title=config.APP_NAME,
        description="Email-gated document distribution with first-access notifications",
        version=config.APP_VERSION,
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        openapi_url="/openapi.json" if config.DEBUG else None,
        lifespan=lifespan,
    )
    application.state.settings = config

    # CORS Middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # GZip Middleware
    application.add_middleware(GZipMiddleware, minimum_size=1000)

    # Exception Handlers
    application.add_exception_handler(AppException, app_exception_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    application.include_router(v1.router, prefix="/api/v1")

    @application.get("/", tags=["Root"])
    async def root():
        """Root endpoint"""
        return {
            "name": config.APP_NAME,
            "version": config.APP_VERSION,
            "environment": config.ENVIRONMENT,
            "docs_url": "/docs" if config.DEBUG else None,
        }

    @application.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint"""
        health_status = {
            "status": "healthy",
            "version": config.APP_VERSION,
            "services": {},
        }

        store = getattr(request.app.state, "store", None)
        if store is None:
            health_status["status"] = "degraded"
            health_status["services"]["store"] = "unavailable"
        elif await store.ping():
            health_status["services"]["store"] = "healthy"
        else:
            health_status["status"] = "degraded"
            health_status["services"]["store"] = "unhealthy"

        sender = getattr(request.app.state, "sender", None)
        health_status["services"]["email"] = sender.provider_name if sender else "unconfigured"

        return health_status

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docgate.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level="info",
    )
