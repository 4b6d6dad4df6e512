"""
Seat diagram API endpoints.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.schemas.layout import (
    ReconciliationResult,
    SeatDiagramCreate,
    SeatDiagramResponse,
    SeatDiagramSyncSummary,
    SpaceBatchRequest,
    SpaceResponse,
)
from fleet_inventory_platform.services.layout_store import SEAT_DIAGRAM
from fleet_inventory_platform.services.reconciliation_service import ReconciliationService
from fleet_inventory_platform.services.seat_diagram_service import SeatDiagramService
from fleet_inventory_platform.database import get_db
from fleet_inventory_platform.docs import SPACE_BATCH_EXAMPLES


router = APIRouter(prefix="/seat-diagrams", tags=["seat-diagrams"])


def get_seat_diagram_service(db: AsyncSession = Depends(get_db)) -> SeatDiagramService:
    """Dependency to get seat diagram service instance."""
    return SeatDiagramService(db)


@router.post("/", response_model=SeatDiagramResponse, status_code=status.HTTP_201_CREATED)
async def create_seat_diagram(
    diagram_data: SeatDiagramCreate,
    seat_diagram_service: SeatDiagramService = Depends(get_seat_diagram_service)
):
    """Create a seat diagram as a copy of a layout template."""
    return await seat_diagram_service.create_seat_diagram(diagram_data)


@router.get("/{seat_diagram_id}", response_model=SeatDiagramResponse)
async def get_seat_diagram(
    seat_diagram_id: UUID,
    seat_diagram_service: SeatDiagramService = Depends(get_seat_diagram_service)
):
    """Get a seat diagram by ID."""
    return await seat_diagram_service.get_seat_diagram(seat_diagram_id)


@router.get("/{seat_diagram_id}/spaces", response_model=List[SpaceResponse])
async def list_seat_diagram_spaces(
    seat_diagram_id: UUID,
    active_only: bool = Query(False, description="Show only active spaces"),
    seat_diagram_service: SeatDiagramService = Depends(get_seat_diagram_service)
):
    """Get a seat diagram's spaces ordered by floor, row and column."""
    return await seat_diagram_service.list_spaces(seat_diagram_id, active_only=active_only)


@router.put("/{seat_diagram_id}/spaces", response_model=ReconciliationResult)
async def update_seat_diagram_spaces(
    seat_diagram_id: UUID,
    batch: SpaceBatchRequest = Body(..., openapi_examples=SPACE_BATCH_EXAMPLES),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace a seat diagram's spaces with a batch of desired cells.

    The diagram is flagged as modified and stops following template syncs
    until it is reset.
    """
    return await ReconciliationService(db).reconcile_spaces(SEAT_DIAGRAM, seat_diagram_id, batch.spaces)


@router.post("/{seat_diagram_id}/reset", response_model=SeatDiagramSyncSummary)
async def reset_seat_diagram(
    seat_diagram_id: UUID,
    seat_diagram_service: SeatDiagramService = Depends(get_seat_diagram_service)
):
    """Discard local edits and copy the template's current layout again."""
    return await seat_diagram_service.reset_to_template(seat_diagram_id)
