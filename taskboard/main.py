# taskboard/main.py
"""
Taskboard FastAPI application.

Users, directories and tasks over MongoDB, with bcrypt password hashing
and stateless JWT session tokens.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded

from taskboard import __version__
from taskboard.api import ROUTERS
from taskboard.core.config import Settings, get_settings
from taskboard.core.exceptions import TaskboardError, UnauthenticatedError
from taskboard.core.logging_config import setup_logging
from taskboard.core.rate_limit_config import RATE_LIMIT_MESSAGE, limiter
from taskboard.middleware.security_middleware import SecurityMiddleware
from taskboard.services.container import ServiceContainer, build_mongo_container
from taskboard.services.mongo_service import MongoConfig, MongoService

logger = logging.getLogger(__name__)


def get_safe_error_message(error: Exception, context: str = "") -> str:
    """Log the full error and return a message that exposes no internals"""
    logger.error(f"Error in {context}: {type(error).__name__}: {error}", exc_info=error)
    return "An internal error occurred. Please try again later."


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Token"}
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors(), exclude={"input"})
    return JSONResponse(
        status_code=400,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "details": {"errors": errors},
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": get_safe_error_message(exc, f"{request.method} {request.url.path}"),
            "details": {},
        },
    )


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> PlainTextResponse:
    response = PlainTextResponse(content=RATE_LIMIT_MESSAGE, status_code=429)
    response.headers["Retry-After"] = "60"
    response.headers["X-RateLimit-Limit"] = str(getattr(exc, "limit", "N/A"))
    return response


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        container: Pre-built services. When omitted, a MongoDB-backed
            container is created on startup and closed on shutdown.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"🚀 {settings.APP_NAME} API starting...")

        mongo = None
        if app.state.container is None:
            mongo = MongoService(MongoConfig.from_settings(settings))
            await mongo.initialize()
            app.state.container = build_mongo_container(settings, mongo)

        logger.info(f"✅ {settings.APP_NAME} API ready")
        logger.info("=" * 60)

        yield

        logger.info(f"🛑 {settings.APP_NAME} API shutting down...")
        if mongo is not None:
            await mongo.shutdown()
            app.state.container = None

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Users, directories and tasks with token authentication",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    # The limiter is module-level because the route decorators bind to it at
    # import time; the most recently created app decides whether it is enabled.
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    app.state.limiter = limiter

    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.middleware("http")(SecurityMiddleware())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        app.include_router(router)

    @app.get("/", status_code=200)
    def read_root():
        """Liveness check"""
        return {"status": "ok", "version": __version__, "service": "taskboard"}

    @app.get("/health")
    async def health():
        """Readiness check including the document store"""
        current = app.state.container
        store = {"healthy": True, "status": "not_configured"}
        if current is not None and current.mongo is not None:
            store = await current.mongo.health_check()
        return JSONResponse(
            status_code=200 if store["healthy"] else 503,
            content={
                "status": "healthy" if store["healthy"] else "degraded",
                "store": store,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    return app


def run() -> None:
    """Serve the API with uvicorn"""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    logger.info(f"🌐 Starting server on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "taskboard.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
    )


if __name__ == "__main__":
    run()
