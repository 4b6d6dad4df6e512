"""
Bus API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_inventory_platform.schemas.bus import BusCreate, BusResponse
from fleet_inventory_platform.services.bus_service import BusService
from fleet_inventory_platform.database import get_db


router = APIRouter(prefix="/buses", tags=["buses"])


def get_bus_service(db: AsyncSession = Depends(get_db)) -> BusService:
    """Dependency to get bus service instance."""
    return BusService(db)


@router.post("/", response_model=BusResponse, status_code=status.HTTP_201_CREATED)
async def create_bus(
    bus_data: BusCreate,
    bus_service: BusService = Depends(get_bus_service)
):
    """
    Register a bus.

    The bus gets its own seat diagram copied from the chosen template,
    named after the template and the registration number.
    """
    return await bus_service.create_bus(bus_data)


@router.get("/{bus_id}", response_model=BusResponse)
async def get_bus(
    bus_id: UUID,
    bus_service: BusService = Depends(get_bus_service)
):
    """Get a bus by ID."""
    return await bus_service.get_bus(bus_id)
