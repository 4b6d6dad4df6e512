"""
Bus service: registering buses together with their own seat diagram.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.models import Bus
from fleet_inventory_platform.schemas.bus import BusCreate
from fleet_inventory_platform.services.layout_store import TEMPLATE, LayoutStore
from fleet_inventory_platform.services.seat_diagram_service import SeatDiagramService
from fleet_inventory_platform.utils.exceptions import BusNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class BusService:
    """Service class for bus operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_bus(self, bus_data: BusCreate) -> Bus:
        """
        Register a bus and clone its seat diagram from a template.

        The diagram is named ``"{template name} - {registration number}"``.
        Bus, diagram, spaces and zones are committed together.

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
            ValidationError: If the registration number is taken or the template is inactive
        """
        existing = await self.db.execute(
            select(Bus.id).where(Bus.registration_number == bus_data.registration_number)
        )
        if existing.scalar_one_or_none() is not None:
            raise ValidationError(
                f"Bus with registration number {bus_data.registration_number} already exists",
                field_errors={"registration_number": ["Registration number already in use"]}
            )

        template = await LayoutStore(self.db, TEMPLATE).get_layout(bus_data.layout_template_id)
        if not template.active:
            raise ValidationError(
                f"Layout template {template.id} is inactive",
                field_errors={"layout_template_id": ["Template is inactive"]}
            )

        try:
            seat_diagram = await SeatDiagramService(self.db).build_from_template(
                template,
                name=f"{template.name} - {bus_data.registration_number}"
            )
            bus = Bus(
                registration_number=bus_data.registration_number,
                economic_number=bus_data.economic_number,
                layout_template_id=template.id,
                seat_diagram_id=seat_diagram.id,
            )
            self.db.add(bus)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Registered bus {bus.id} with seat diagram {seat_diagram.id}")
        return bus

    async def get_bus(self, bus_id: UUID) -> Bus:
        """
        Get a bus by ID.

        Raises:
            BusNotFoundError: If the bus does not exist
        """
        bus = await self.db.get(Bus, bus_id)
        if bus is None:
            raise BusNotFoundError(str(bus_id))
        return bus
