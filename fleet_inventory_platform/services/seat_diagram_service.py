"""
Seat diagram service: cloning templates into per-bus diagrams and resetting them.
"""

import copy
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.cache import layout_lock
from fleet_inventory_platform.models import LayoutTemplate, SeatDiagram, SpaceType
from fleet_inventory_platform.schemas.layout import SeatDiagramCreate, SeatDiagramSyncSummary
from fleet_inventory_platform.services.layout_store import SEAT_DIAGRAM, TEMPLATE, LayoutStore, space_to_record
from fleet_inventory_platform.services.template_sync_service import STRUCTURAL_FIELDS, TemplateSyncService
from fleet_inventory_platform.services.zone_service import clone_zones
from fleet_inventory_platform.utils.exceptions import ValidationError
from fleet_inventory_platform.utils.logging_config import log_business_event

logger = logging.getLogger(__name__)


class SeatDiagramService:
    """Service class for seat diagram operations."""

    def __init__(self, db: AsyncSession):
        """Initialize the seat diagram service with database session."""
        self.db = db
        self.store = LayoutStore(db, SEAT_DIAGRAM)
        self.templates = LayoutStore(db, TEMPLATE)

    async def build_from_template(self, template: LayoutTemplate, name: Optional[str] = None) -> SeatDiagram:
        """
        Stage a new seat diagram cloned from a template, without committing.

        The diagram copies the template's shape, its active spaces and its
        zones. The copies are independent rows owned by the diagram.

        Args:
            template: Source template
            name: Diagram name, defaults to the template name

        Returns:
            The flushed seat diagram
        """
        seat_diagram = SeatDiagram(
            layout_template_id=template.id,
            name=name or template.name,
            description=template.description,
            is_modified=False,
            active=True,
            **{field: copy.deepcopy(getattr(template, field)) for field in STRUCTURAL_FIELDS}
        )
        self.db.add(seat_diagram)
        await self.db.flush()

        records = [space_to_record(space) for space in await self.templates.list_spaces(template.id, active_only=True)]
        self.store.add_spaces(seat_diagram.id, records)
        seat_diagram.total_seats = sum(1 for record in records if record["space_type"] == SpaceType.SEAT)

        zones = clone_zones(self.store, seat_diagram.id, await self.templates.list_zones(template.id))
        await self.db.flush()

        logger.debug(
            f"Cloned template {template.id} into seat diagram {seat_diagram.id}: "
            f"{len(records)} spaces, {len(zones)} zones"
        )
        return seat_diagram

    async def create_seat_diagram(self, diagram_data: SeatDiagramCreate) -> SeatDiagram:
        """
        Create a seat diagram from a template.

        The diagram, its spaces and its zones are committed together.

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
            ValidationError: If the template is inactive
        """
        template = await self.templates.get_layout(diagram_data.layout_template_id)
        if not template.active:
            raise ValidationError(
                f"Layout template {template.id} is inactive",
                field_errors={"layout_template_id": ["Template is inactive"]}
            )

        try:
            seat_diagram = await self.build_from_template(template, diagram_data.name)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        log_business_event(
            "seat_diagram_created",
            {"seat_diagram_id": str(seat_diagram.id), "template_id": str(template.id)}
        )
        return seat_diagram

    async def get_seat_diagram(self, seat_diagram_id: UUID) -> SeatDiagram:
        """
        Get a seat diagram by ID.

        Raises:
            SeatDiagramNotFoundError: If the diagram does not exist
        """
        return await self.store.get_layout(seat_diagram_id)

    async def list_spaces(self, seat_diagram_id: UUID, active_only: bool = False):
        """List a diagram's spaces ordered by floor, row and column."""
        await self.store.get_layout(seat_diagram_id)
        return await self.store.list_spaces(seat_diagram_id, active_only=active_only)

    async def reset_to_template(self, seat_diagram_id: UUID) -> SeatDiagramSyncSummary:
        """
        Discard a diagram's local edits and make it follow its template again.

        Clears ``is_modified`` and applies the template's current shape,
        spaces and zones in one transaction.

        Raises:
            SeatDiagramNotFoundError: If the diagram does not exist
            ValidationError: If the diagram has no template
        """
        async with layout_lock(SEAT_DIAGRAM.name, seat_diagram_id):
            seat_diagram = await self.store.get_layout(seat_diagram_id)
            if seat_diagram.layout_template_id is None:
                raise ValidationError(
                    f"Seat diagram {seat_diagram_id} is not linked to a layout template"
                )

            sync_service = TemplateSyncService(self.db)
            try:
                snapshot = await sync_service.snapshot_template(seat_diagram.layout_template_id)
                seat_diagram.is_modified = False
                summary = await sync_service.apply_snapshot(snapshot, seat_diagram)
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                raise

        logger.info(f"Reset seat diagram {seat_diagram_id} to template {snapshot.template_id}")
        log_business_event(
            "seat_diagram_reset",
            {
                "seat_diagram_id": str(seat_diagram_id),
                "spaces_created": summary.created,
                "spaces_updated": summary.updated,
                "spaces_deleted": summary.deleted,
            }
        )
        return summary
