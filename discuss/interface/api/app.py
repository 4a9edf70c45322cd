"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss.config import Settings
from discuss.interface.api.routes import comments, health
from discuss.util.di.container import create_container, setup_di
from discuss.util.observability import instrument_fastapi


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Dependency injection is not wired here; callers attach a container with
    setup_di so tests can swap in an in-memory one.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Application settings, loaded from the environment if omitted

    Returns:
        FastAPI application with routes and CORS configured
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Discuss API",
        description="Threaded comments for published articles",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_origins,
        allow_credentials=True,  # auth_token travels as a cookie
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance


def create_production_app() -> FastAPI:
    """Create the application with the production DI container attached."""
    app_instance = create_app()
    setup_di(app_instance, create_container())
    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_production_app()
