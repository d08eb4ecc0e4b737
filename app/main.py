# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Adaptive Fitness API.
# It configures the FastAPI application with middleware, routers, and handlers,
# and brings up MongoDB before the server accepts traffic.
#
# Usage:
#   python -m app.main                 # connect database, then bind PORT
#   uvicorn app.main:app --port 5000   # same sequence, run from the lifespan
# =============================================================================

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import Settings, settings
from app.context import AppContext
from app.exceptions import (
    FitnessApiException,
    fitness_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import register_request_logging
from app.routers import health, motivation, nutrition, progress, session
from lib.database import (
    Connected,
    DatabaseConnector,
    Failed,
    close_connection,
    ensure_indexes,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Startup
# =============================================================================

async def connect_database(
    config: Settings,
    connector: DatabaseConnector | None = None,
) -> Connected | Failed:
    """
    Run the primary -> in-memory connection sequence.

    On success the indexes are ensured before the handle is returned.
    """
    connector = connector or DatabaseConnector(config.MONGO_URI, config.MONGO_DB_NAME)
    result = await connector.connect()

    if isinstance(result, Failed):
        logger.error(f"Failed to start in-memory MongoDB: {result.reason}")
        return result

    await ensure_indexes(result.database)
    return result


def log_startup(config: Settings) -> None:
    logger.info(f"Starting Adaptive Fitness API in {config.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {config.cors_origins_list}")


def log_ready(config: Settings) -> None:
    logger.info(f"Server running on http://localhost:{config.PORT}")
    logger.info(f"API Base: http://localhost:{config.PORT}/api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    When the app was created without a context (e.g. `uvicorn app.main:app`),
    the database is connected here; a total failure aborts startup before
    uvicorn binds its socket.
    """
    connection = None

    if app.state.context is None:
        log_startup(settings)
        result = await connect_database(settings)
        if isinstance(result, Failed):
            raise SystemExit(1)
        connection = result
        app.state.context = AppContext(settings=settings, database=result.database)
        log_ready(settings)

    yield

    logger.info("Shutting down Adaptive Fitness API")
    if connection is not None:
        await close_connection(connection)


# =============================================================================
# Application Factory
# =============================================================================

def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        context: Settings and database to serve with. When omitted, the
            lifespan connects the database on startup.

    Middleware order (outermost first): CORS -> request logger.
    Bodies are parsed per route by app.body.parse_body.
    """
    app_settings = context.settings if context else settings

    app = FastAPI(
        title="Adaptive Fitness API",
        description="Workout planning, progress tracking, nutrition logging and motivation.",
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Health", "description": "API health checks"},
            {"name": "Auth", "description": "Registration, login and profile"},
            {"name": "Session", "description": "Workout sessions and intensity recommendations"},
            {"name": "Progress", "description": "Body measurements and progress summary"},
            {"name": "Nutrition", "description": "Meal logging and daily totals"},
            {"name": "Motivation", "description": "Quotes and workout streaks"},
        ],
    )
    app.state.context = context

    # -------------------------------------------------------------------------
    # Middleware (last added runs first)
    # -------------------------------------------------------------------------

    register_request_logging(app, log_bodies=app_settings.LOG_REQUEST_BODIES)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(FitnessApiException, fitness_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(session.router, prefix="/api/session", tags=["Session"])
    app.include_router(progress.router, prefix="/api/progress", tags=["Progress"])
    app.include_router(nutrition.router, prefix="/api/nutrition", tags=["Nutrition"])
    app.include_router(motivation.router, prefix="/api/motivation", tags=["Motivation"])

    return app


app = create_app()


# =============================================================================
# Server Entry Point
# =============================================================================

async def serve(
    config: Settings = settings,
    connector: DatabaseConnector | None = None,
) -> int:
    """
    Connect the database, then serve until shutdown.

    Returns:
        Process exit code: 1 when no database could be reached (nothing is
        bound in that case), 0 after a clean shutdown.
    """
    log_startup(config)
    result = await connect_database(config, connector)
    if isinstance(result, Failed):
        return 1

    application = create_app(AppContext(settings=config, database=result.database))
    server = uvicorn.Server(
        uvicorn.Config(
            application,
            host=config.API_HOST,
            port=config.PORT,
            log_config=None,
        )
    )

    log_ready(config)
    try:
        await server.serve()
    finally:
        await close_connection(result)
    return 0


def main() -> None:
    exit_code = asyncio.run(serve())
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
