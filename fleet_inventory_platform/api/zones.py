"""
Zone API endpoints, mounted under templates and seat diagrams.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.schemas.zone import ZoneCreate, ZoneResponse, ZoneUpdate
from fleet_inventory_platform.services.layout_store import SEAT_DIAGRAM, TEMPLATE, LayoutKind
from fleet_inventory_platform.services.zone_service import ZoneService
from fleet_inventory_platform.database import get_db
from fleet_inventory_platform.docs import ZONE_EXAMPLES


def build_zone_router(kind: LayoutKind, prefix: str, tag: str) -> APIRouter:
    """
    Build the zone CRUD routes for one layout kind.

    Args:
        kind: Layout kind owning the zones
        prefix: Path of the owning layout, with a ``{layout_id}`` parameter
        tag: OpenAPI tag

    Returns:
        Router with create, list, get, update and delete routes
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    def get_zone_service(db: AsyncSession = Depends(get_db)) -> ZoneService:
        return ZoneService(db, kind)

    @router.post("/", response_model=ZoneResponse, status_code=status.HTTP_201_CREATED)
    async def create_zone(
        layout_id: UUID,
        zone_data: ZoneCreate = Body(..., openapi_examples=ZONE_EXAMPLES),
        zone_service: ZoneService = Depends(get_zone_service)
    ):
        """Create a pricing zone."""
        return await zone_service.create_zone(layout_id, zone_data)

    @router.get("/", response_model=List[ZoneResponse])
    async def list_zones(
        layout_id: UUID,
        zone_service: ZoneService = Depends(get_zone_service)
    ):
        """List pricing zones."""
        return await zone_service.list_zones(layout_id)

    @router.get("/{zone_id}", response_model=ZoneResponse)
    async def get_zone(
        layout_id: UUID,
        zone_id: UUID,
        zone_service: ZoneService = Depends(get_zone_service)
    ):
        """Get a pricing zone."""
        return await zone_service.get_zone(layout_id, zone_id)

    @router.put("/{zone_id}", response_model=ZoneResponse)
    async def update_zone(
        layout_id: UUID,
        zone_id: UUID,
        zone_data: ZoneUpdate,
        zone_service: ZoneService = Depends(get_zone_service)
    ):
        """Update a pricing zone."""
        return await zone_service.update_zone(layout_id, zone_id, zone_data)

    @router.delete("/{zone_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_zone(
        layout_id: UUID,
        zone_id: UUID,
        zone_service: ZoneService = Depends(get_zone_service)
    ):
        """Delete a pricing zone."""
        await zone_service.delete_zone(layout_id, zone_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


template_zones_router = build_zone_router(TEMPLATE, "/layout-templates/{layout_id}/zones", "template-zones")
seat_diagram_zones_router = build_zone_router(SEAT_DIAGRAM, "/seat-diagrams/{layout_id}/zones", "seat-diagram-zones")
