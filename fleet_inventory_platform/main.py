"""FastAPI application setup and configuration."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from fleet_inventory_platform import database
from fleet_inventory_platform.api import api_router
from fleet_inventory_platform.cache import get_cache
from fleet_inventory_platform.config import settings
from fleet_inventory_platform.database import init_database, close_database
from fleet_inventory_platform.docs import ERROR_RESPONSES
from fleet_inventory_platform.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from fleet_inventory_platform.schemas.common import HealthResponse
from fleet_inventory_platform.utils.logging_config import setup_logging

# Set up logging
setup_logging(
    log_level="DEBUG" if settings.debug else settings.log_level,
    log_file="logs/fleet_inventory.log" if settings.environment == "production" else None,
    enable_json_logging=settings.enable_json_logging or settings.environment == "production"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Fleet Inventory Platform")
    await init_database()
    yield
    # Shutdown
    logger.info("Shutting down Fleet Inventory Platform")
    await close_database()

app = FastAPI(
    title="Fleet Inventory Platform API",
    description="""
    ## Fleet Inventory Platform

    Seat-layout engine for a bus fleet.

    ### Key Features

    * **Layout Templates**: Describe a bus model by floors, rows and seats per side; seats are generated
    * **Seat Diagrams**: Per-bus copies of a template that can be edited cell by cell
    * **Batch Space Edits**: Submit the full desired grid; cells are created, updated or deactivated
    * **Template Sync**: Push template changes to every seat diagram that has not been edited
    * **Pricing Zones**: Row-based price multipliers on templates and seat diagrams

    ### Error Handling

    The API returns structured error responses:

    ```json
    {
      "error": {
        "error_code": "VALIDATION_ERROR",
        "message": "Duplicate positions found in payload",
        "details": {
          "field_errors": {"spaces[1].position": ["Duplicate position 1:0:1 (first used by spaces[0])"]}
        }
      }
    }
    ```
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "layout-templates",
            "description": "Bus layout templates and their generated spaces"
        },
        {
            "name": "template-zones",
            "description": "Pricing zones of layout templates"
        },
        {
            "name": "seat-diagrams",
            "description": "Per-bus seat diagrams cloned from templates"
        },
        {
            "name": "seat-diagram-zones",
            "description": "Pricing zones of seat diagrams"
        },
        {
            "name": "buses",
            "description": "Bus registration"
        },
        {
            "name": "health",
            "description": "System health endpoints"
        }
    ],
    responses=ERROR_RESPONSES,
    lifespan=lifespan,
)

# Middleware stack (the last one added runs first)

# 1. Error handling middleware (innermost, turns exceptions into responses)
app.add_middleware(
    ErrorHandlerMiddleware,
    debug=settings.debug
)

# 2. Logging middleware (tags error responses with the request ID too)
app.add_middleware(
    LoggingMiddleware,
    log_requests=settings.enable_request_logging,
    log_responses=settings.enable_request_logging
)

# 3. CORS middleware
if settings.debug:
    # Development: Allow all origins for easier development
    cors_origins = ["*"]
    cors_allow_credentials = False  # Cannot use credentials with wildcard origins
else:
    cors_origins = settings.cors_origins
    cors_allow_credentials = settings.cors_allow_credentials

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=settings.cors_expose_headers
)

# Include API routes
app.include_router(api_router)


@app.get("/", tags=["health"])
async def root():
    """Root endpoint for API information."""
    return {
        "message": "Fleet Inventory Platform API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "status": "operational"
    }


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Reports the database and, when layout locks are enabled, Redis.
    """
    checks = {}

    if database.engine is None:
        checks["database"] = "not_initialized"
    else:
        try:
            async with database.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            checks["database"] = "unavailable"

    if settings.enable_layout_locks:
        checks["redis"] = "ok" if await get_cache().ping() else "unavailable"

    degraded = any(value == "unavailable" for value in checks.values())
    return HealthResponse(
        status="degraded" if degraded else "healthy",
        service="fleet-inventory-platform",
        checks=checks
    )
