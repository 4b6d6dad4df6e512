"""
Layout template API endpoints.
"""

from typing import List, Union
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.schemas.layout import (
    LayoutTemplateCreate,
    LayoutTemplateResponse,
    LayoutTemplateUpdate,
    ReconciliationResult,
    SpaceBatchRequest,
    SpaceResponse,
    TemplateSyncQueued,
    TemplateSyncResult,
)
from fleet_inventory_platform.services.layout_store import TEMPLATE
from fleet_inventory_platform.services.reconciliation_service import ReconciliationService
from fleet_inventory_platform.services.template_service import TemplateService
from fleet_inventory_platform.services.template_sync_service import TemplateSyncService
from fleet_inventory_platform.database import get_db
from fleet_inventory_platform.docs import LAYOUT_TEMPLATE_EXAMPLES, SPACE_BATCH_EXAMPLES


router = APIRouter(prefix="/layout-templates", tags=["layout-templates"])


def get_template_service(db: AsyncSession = Depends(get_db)) -> TemplateService:
    """Dependency to get template service instance."""
    return TemplateService(db)


@router.post("/", response_model=LayoutTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: LayoutTemplateCreate = Body(..., openapi_examples=LAYOUT_TEMPLATE_EXAMPLES),
    template_service: TemplateService = Depends(get_template_service)
):
    """
    Create a layout template.

    One seat is generated for every left and right seat slot of every row
    of every floor; the aisle column stays empty. Seats are numbered from 1
    across the whole bus.
    """
    return await template_service.create_template(template_data)


@router.get("/", response_model=List[LayoutTemplateResponse])
async def list_templates(
    active_only: bool = Query(True, description="Show only active templates"),
    template_service: TemplateService = Depends(get_template_service)
):
    """List layout templates ordered by name."""
    return await template_service.list_templates(active_only=active_only)


@router.get("/{template_id}", response_model=LayoutTemplateResponse)
async def get_template(
    template_id: UUID,
    template_service: TemplateService = Depends(get_template_service)
):
    """Get a layout template by ID."""
    return await template_service.get_template(template_id)


@router.put("/{template_id}", response_model=LayoutTemplateResponse)
async def update_template(
    template_id: UUID,
    template_data: LayoutTemplateUpdate,
    regenerate_seats: bool = Query(False, description="Rebuild the template's spaces from its floor configuration"),
    template_service: TemplateService = Depends(get_template_service)
):
    """
    Update a layout template.

    With ``regenerate_seats=true`` the template's spaces are replaced by a
    freshly generated set. Seat diagrams only follow after a sync.
    """
    return await template_service.update_template(template_id, template_data, regenerate_seats)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID,
    template_service: TemplateService = Depends(get_template_service)
):
    """Retire a layout template. Refused while seat diagrams reference it."""
    await template_service.delete_template(template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{template_id}/spaces", response_model=List[SpaceResponse])
async def list_template_spaces(
    template_id: UUID,
    active_only: bool = Query(False, description="Show only active spaces"),
    template_service: TemplateService = Depends(get_template_service)
):
    """Get a template's spaces ordered by floor, row and column."""
    return await template_service.list_spaces(template_id, active_only=active_only)


@router.put("/{template_id}/spaces", response_model=ReconciliationResult)
async def update_template_spaces(
    template_id: UUID,
    batch: SpaceBatchRequest = Body(..., openapi_examples=SPACE_BATCH_EXAMPLES),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace a template's spaces with a batch of desired cells.

    Cells are matched by position; cells missing from the batch are
    deactivated. The template's seat diagrams are not touched.
    """
    return await ReconciliationService(db).reconcile_spaces(TEMPLATE, template_id, batch.spaces)


@router.post(
    "/{template_id}/spaces/regenerate",
    response_model=Union[TemplateSyncQueued, TemplateSyncResult]
)
async def sync_template_spaces(
    template_id: UUID,
    background: bool = Query(False, description="Run the sync in a Celery worker"),
    db: AsyncSession = Depends(get_db)
):
    """
    Push a template's shape, spaces and zones to its seat diagrams.

    Seat diagrams edited since their creation (``is_modified``) are skipped.
    With ``background=true`` the sync is queued and its task id returned.
    """
    template_service = TemplateService(db)
    await template_service.get_template(template_id)

    if background:
        from fleet_inventory_platform.tasks.sync_tasks import sync_template_instances_task

        task = sync_template_instances_task.delay(str(template_id))
        return TemplateSyncQueued(layout_template_id=template_id, task_id=task.id)

    return await TemplateSyncService(db).sync_template_to_seat_diagrams(template_id)
