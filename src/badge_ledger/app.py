"""FastAPI application factory for Badge-Ledger."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from badge_ledger.common.config import get_settings
from badge_ledger.common.logging import setup_logging
from badge_ledger.common.schemas import HealthResponse


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from badge_ledger.deps import get_db
        db = get_db()
        await db.init()
        await db.create_all()
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from badge_ledger.registry.router import router as registry_router
    from badge_ledger.events.router import router as events_router

    prefix = settings.api_prefix
    app.include_router(registry_router, prefix=prefix, tags=["badges"])
    app.include_router(events_router, prefix=prefix, tags=["events"])

    return app
