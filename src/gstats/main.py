"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gstats.auth.router import router as auth_router
from gstats.config import get_settings
from gstats.gateway.router import router as gateway_router
from gstats.health.router import router as health_router
from gstats.middleware import setup_middleware
from gstats.profiles.router import router as profiles_router
from gstats.rankings.router import router as rankings_router
from gstats.state import close_state, init_state


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    await init_state(get_settings())
    yield
    await close_state()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Game Stats API",
        description="Player accounts, character linking and alliance leaderboards",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(profiles_router)
    app.include_router(rankings_router)
    app.include_router(gateway_router)

    return app


app = create_app()
