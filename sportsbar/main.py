"""
Sports Bar API - Main Application Entry Point
Content backend for the bar's public site and its admin panel
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import structlog

from sportsbar.api import auth, content, events, games, menu, migration, reservations
from sportsbar.core.config import get_settings
from sportsbar.storage import Storage, create_storage

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)
settings = get_settings()


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    """Build the application; tests pass a ready storage adapter"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        # Startup
        logger.info(f"Initializing {settings.APP_NAME} ({settings.ENVIRONMENT})")
        app.state.storage = storage if storage is not None else create_storage(settings)
        logger.info(f"Storage ready: {type(app.state.storage).__name__}")

        yield

        # Shutdown
        logger.info(f"Shutting down {settings.APP_NAME}")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Menu, events, games schedule, reservations and site content",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Configure middleware stack
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    prefix = settings.API_PREFIX
    app.include_router(menu.router, prefix=f"{prefix}/menu", tags=["menu"])
    app.include_router(events.router, prefix=f"{prefix}/events", tags=["events"])
    app.include_router(games.router, prefix=f"{prefix}/games", tags=["games"])
    app.include_router(reservations.router, prefix=f"{prefix}/reservations", tags=["reservations"])
    app.include_router(content.router, prefix=prefix, tags=["content"])
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])

    admin = f"{prefix}/admin"
    app.include_router(menu.admin_router, prefix=f"{admin}/menu", tags=["admin"])
    app.include_router(events.admin_router, prefix=f"{admin}/events", tags=["admin"])
    app.include_router(games.admin_router, prefix=f"{admin}/games", tags=["admin"])
    app.include_router(reservations.admin_router, prefix=f"{admin}/reservations", tags=["admin"])
    app.include_router(content.admin_router, prefix=admin, tags=["admin"])
    app.include_router(migration.router, prefix=f"{admin}/migration", tags=["admin"])

    @app.get(f"{prefix}/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "sportsbar-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "sportsbar.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
