"""
Zone service for pricing zones of templates and seat diagrams.
"""

import logging
from typing import Any, Dict, Iterable, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.zone import ZoneCreate, ZoneUpdate
from .layout_store import LayoutKind, LayoutStore, zone_to_record

logger = logging.getLogger(__name__)


def clone_zones(target: LayoutStore, layout_id: UUID, source_zones: Iterable[Any]) -> List[Any]:
    """
    Copy zones onto another layout.

    Accepts zone rows or zone records and preserves ``name``,
    ``row_numbers`` and ``price_multiplier``; the copies belong to
    ``layout_id``. Nothing is committed here, so the copies share the
    caller's transaction.

    Args:
        target: Store of the receiving layout kind
        layout_id: Receiving layout
        source_zones: Zones to copy

    Returns:
        The staged zone copies
    """
    records: List[Dict[str, Any]] = [
        zone if isinstance(zone, dict) else zone_to_record(zone)
        for zone in source_zones
    ]
    return target.add_zones(layout_id, records)


class ZoneService:
    """Service for managing the zones of one layout kind."""

    def __init__(self, db: AsyncSession, kind: LayoutKind):
        self.db = db
        self.kind = kind
        self.store = LayoutStore(db, kind)

    async def create_zone(self, layout_id: UUID, zone_data: ZoneCreate):
        """
        Create a zone on a layout.

        Raises:
            NotFoundError: If the layout does not exist
        """
        await self.store.get_layout(layout_id)
        zone = self.store.add_zones(layout_id, [zone_data.model_dump()])[0]
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Created zone {zone.id} on {self.kind.name} {layout_id}")
        return zone

    async def list_zones(self, layout_id: UUID) -> List[Any]:
        """List the zones of a layout."""
        await self.store.get_layout(layout_id)
        return await self.store.list_zones(layout_id)

    async def get_zone(self, layout_id: UUID, zone_id: UUID):
        """Get a zone of a layout."""
        await self.store.get_layout(layout_id)
        return await self.store.get_zone(layout_id, zone_id)

    async def update_zone(self, layout_id: UUID, zone_id: UUID, zone_data: ZoneUpdate):
        """Update a zone of a layout."""
        zone = await self.get_zone(layout_id, zone_id)

        for field, value in zone_data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(zone, field, value)

        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Updated zone {zone_id} on {self.kind.name} {layout_id}")
        return zone

    async def delete_zone(self, layout_id: UUID, zone_id: UUID) -> None:
        """Delete a zone of a layout."""
        zone = await self.get_zone(layout_id, zone_id)
        await self.db.delete(zone)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Deleted zone {zone_id} from {self.kind.name} {layout_id}")
