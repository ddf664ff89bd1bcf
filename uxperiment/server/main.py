"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uxperiment.core.database import init_db
from uxperiment.core.logging_config import get_logger, setup_logging
from uxperiment.core.monitoring import initialize_logfire

from .api.v1 import (
    auth,
    components,
    favorites,
    health,
    plans,
    settings as settings_api,
    statistics,
    subscriptions,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTimingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    logger.info("Starting up UXperiment API...")
    try:
        await init_db(create_tables=settings.database_create_tables)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down UXperiment API...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    UXperiment API

    Backend of the UXperiment component marketplace: browse and preview CSS
    components, keep favorites, subscribe to plans for premium components and
    follow usage statistics from the admin dashboard.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestTimingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(components.router, prefix=f"{constant.API_V1_STR}/components")
app.include_router(favorites.router, prefix=f"{constant.API_V1_STR}/favorites")
app.include_router(statistics.router, prefix=f"{constant.API_V1_STR}/statistics")
app.include_router(plans.router, prefix=f"{constant.API_V1_STR}/plans")
app.include_router(subscriptions.router, prefix=f"{constant.API_V1_STR}/subscriptions")
app.include_router(settings_api.router, prefix=f"{constant.API_V1_STR}/settings")
