"""Main FastAPI application entry point."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_notification_dispatcher, get_notification_service
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""

    async def notification_cleanup_loop() -> None:
        """Periodically delete expired notifications."""
        while True:
            await asyncio.sleep(settings.notification_cleanup_interval_seconds)
            try:
                service = get_notification_service()
                deleted = await service.cleanup_expired()
                if deleted > 0:
                    logger.info(
                        "notification_cleanup_completed",
                        deleted_count=deleted,
                    )
            except Exception:
                logger.exception("notification_cleanup_failed")

    dispatcher = get_notification_dispatcher()
    await dispatcher.start()
    cleanup_task = asyncio.create_task(notification_cleanup_loop())
    yield
    cleanup_task.cancel()
    await dispatcher.stop()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Club Membership Service\n\n"
            "Backend for a motorcycle club community: clubs, membership and "
            "join requests, admin roles, nearby-club discovery, club events and "
            "in-app notifications.\n\n"
            "### Authentication\n"
            "All endpoints (except `/health` and `/api/wakeup`) require a valid JWT "
            "in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            f"- Reads: {settings.rate_limit_read}\n"
            f"- Writes: {settings.rate_limit_write}\n"
            f"- Nearby search: {settings.rate_limit_search}"
        ),
        version="1.0.0",
        debug=settings.debug,
        contact={
            "name": "Motoclub Support",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "clubs", "description": "Club creation, lookup and nearby discovery"},
            {"name": "membership", "description": "Join requests, members and admin roles"},
            {"name": "events", "description": "Club events"},
            {"name": "notifications", "description": "In-app notification feed"},
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
