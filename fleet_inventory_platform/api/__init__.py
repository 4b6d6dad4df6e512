"""API endpoints for the Fleet Inventory Platform."""

from fastapi import APIRouter
from .layout_templates import router as layout_templates_router
from .seat_diagrams import router as seat_diagrams_router
from .zones import template_zones_router, seat_diagram_zones_router
from .buses import router as buses_router

# Create main API router
api_router = APIRouter(prefix="/api/v1")

# Include all routers
api_router.include_router(layout_templates_router)
api_router.include_router(template_zones_router)
api_router.include_router(seat_diagrams_router)
api_router.include_router(seat_diagram_zones_router)
api_router.include_router(buses_router)

__all__ = ["api_router"]
