"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from collaboration.presentation import routes as collaborator_routes
from infrastructure.authorization_dependencies import close_authorization_clients
from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_session,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_keycloak_settings, get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def collaborators_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration and startup/shutdown events
    - Keycloak HTTP clients (created lazily, closed on shutdown)
    - Database engine (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_started(
        app_name=settings.app_name,
        version=__version__,
        realm_url=get_keycloak_settings().realm_url,
    )

    yield

    await close_authorization_clients()
    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title="Space Collaborators API",
    description="Manage the identities allowed to act on a space",
    version=__version__,
    lifespan=collaborators_lifespan,
)

app.include_router(collaborator_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> dict:
    """Check database connection health."""
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "connected": True}
    except Exception as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }
