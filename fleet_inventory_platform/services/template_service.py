"""
Layout template service: creation with seat generation, updates and retirement.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.models import LayoutTemplate, SeatDiagram
from fleet_inventory_platform.schemas.layout import LayoutTemplateCreate, LayoutTemplateUpdate
from fleet_inventory_platform.services.layout_generator import find_floor_configuration, generate_space_records
from fleet_inventory_platform.services.layout_store import TEMPLATE, LayoutStore
from fleet_inventory_platform.utils.exceptions import LayoutInUseError, ValidationError
from fleet_inventory_platform.utils.logging_config import log_business_event

logger = logging.getLogger(__name__)


class TemplateService:
    """Service class for layout template operations."""

    def __init__(self, db: AsyncSession):
        """Initialize the template service with database session."""
        self.db = db
        self.store = LayoutStore(db, TEMPLATE)

    async def create_template(self, template_data: LayoutTemplateCreate) -> LayoutTemplate:
        """
        Create a layout template and generate its seats.

        The template and its generated spaces are committed together; if
        generation fails nothing is stored.

        Args:
            template_data: Template creation data

        Returns:
            Created template with ``total_seats`` set to the generated seat count

        Raises:
            ValidationError: If a floor has no configuration or no seat would be generated
        """
        seats_per_floor = [floor.model_dump() for floor in template_data.seats_per_floor]

        try:
            records = generate_space_records(template_data.num_floors, seats_per_floor)

            template = LayoutTemplate(
                name=template_data.name,
                description=template_data.description,
                max_capacity=template_data.max_capacity,
                num_floors=template_data.num_floors,
                seats_per_floor=seats_per_floor,
                total_seats=len(records),
                is_factory_default=template_data.is_factory_default,
                active=True,
            )
            self.db.add(template)
            await self.db.flush()

            self.store.add_spaces(template.id, records)
            await self.db.commit()

        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Created layout template {template.id} with {template.total_seats} seats")
        log_business_event(
            "template_created",
            {"template_id": str(template.id), "total_seats": template.total_seats}
        )
        return template

    async def get_template(self, template_id: UUID) -> LayoutTemplate:
        """
        Get a template by ID.

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
        """
        return await self.store.get_layout(template_id)

    async def list_templates(self, active_only: bool = True) -> List[LayoutTemplate]:
        """List templates ordered by name."""
        query = select(LayoutTemplate).order_by(LayoutTemplate.name, LayoutTemplate.created_at)
        if active_only:
            query = query.where(LayoutTemplate.active.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_template(
        self,
        template_id: UUID,
        template_data: LayoutTemplateUpdate,
        regenerate_seats: bool = False
    ) -> LayoutTemplate:
        """
        Update a template.

        With ``regenerate_seats`` the template's spaces are deleted and
        generated again from the (possibly new) floor configuration, in the
        same transaction as the field update. Seat diagrams are not touched;
        push the template to them with a sync.

        Args:
            template_id: Template to update
            template_data: Fields to change
            regenerate_seats: Rebuild the template's spaces

        Returns:
            Updated template

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
            ValidationError: If regeneration fails for the floor configuration
        """
        template = await self.store.get_layout(template_id)

        try:
            update_data = template_data.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is not None:
                    setattr(template, field, value)

            missing_floors = [
                floor_number for floor_number in range(1, template.num_floors + 1)
                if find_floor_configuration(template.seats_per_floor, floor_number) is None
            ]
            if missing_floors:
                raise ValidationError(
                    f"Floor configuration not found for floor {missing_floors[0]}",
                    field_errors={"seats_per_floor": [f"Missing configuration for floors {missing_floors}"]}
                )

            if regenerate_seats:
                records = generate_space_records(template.num_floors, template.seats_per_floor)
                deleted = await self.store.delete_spaces(template.id)
                self.store.add_spaces(template.id, records)
                template.total_seats = len(records)
                logger.info(
                    f"Regenerated template {template_id}: {deleted} spaces replaced by {len(records)} seats"
                )

            await self.db.commit()

        except Exception:
            await self.db.rollback()
            raise

        return template

    async def delete_template(self, template_id: UUID) -> None:
        """
        Retire a template (soft delete).

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
            LayoutInUseError: If seat diagrams still reference the template
        """
        template = await self.store.get_layout(template_id)

        result = await self.db.execute(
            select(func.count(SeatDiagram.id)).where(SeatDiagram.layout_template_id == template_id)
        )
        seat_diagram_count = result.scalar_one()
        if seat_diagram_count:
            raise LayoutInUseError(str(template_id), seat_diagram_count)

        template.active = False
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Deactivated layout template {template_id}")

    async def list_spaces(self, template_id: UUID, active_only: bool = False):
        """List a template's spaces ordered by floor, row and column."""
        await self.store.get_layout(template_id)
        return await self.store.list_spaces(template_id, active_only=active_only)

