"""
Data access shared by templates and seat diagrams.

Both layout kinds own spaces and zones with the same shape; ``LayoutKind``
describes the tables of one kind and ``LayoutStore`` runs the queries the
layout services need against them.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.layout import LayoutTemplate, SeatDiagram
from ..models.space import SpaceType, TemplateSpace, SeatDiagramSpace
from ..models.zone import TemplateZone, SeatDiagramZone
from ..utils.exceptions import (
    NotFoundError,
    LayoutTemplateNotFoundError,
    SeatDiagramNotFoundError,
    ZoneNotFoundError,
)

logger = logging.getLogger(__name__)

SPACE_FIELDS = (
    "floor_number",
    "position_x",
    "position_y",
    "space_type",
    "seat_number",
    "seat_type",
    "reclinement_angle",
    "amenities",
    "meta",
    "active",
)

ZONE_FIELDS = ("name", "row_numbers", "price_multiplier")


@dataclass(frozen=True)
class LayoutKind:
    """Tables and behaviour of one kind of layout."""
    name: str
    layout_model: Type
    space_model: Type
    zone_model: Type
    owner_field: str
    not_found_error: Type[NotFoundError]
    tracks_modification: bool


TEMPLATE = LayoutKind(
    name="template",
    layout_model=LayoutTemplate,
    space_model=TemplateSpace,
    zone_model=TemplateZone,
    owner_field="layout_template_id",
    not_found_error=LayoutTemplateNotFoundError,
    tracks_modification=False,
)

SEAT_DIAGRAM = LayoutKind(
    name="seat_diagram",
    layout_model=SeatDiagram,
    space_model=SeatDiagramSpace,
    zone_model=SeatDiagramZone,
    owner_field="seat_diagram_id",
    not_found_error=SeatDiagramNotFoundError,
    tracks_modification=True,
)


def space_to_record(space) -> Dict[str, Any]:
    """Copy the layout-relevant columns of a space into a plain dict."""
    return {field: copy.deepcopy(getattr(space, field)) for field in SPACE_FIELDS}


def zone_to_record(zone) -> Dict[str, Any]:
    """Copy the columns of a zone into a plain dict."""
    return {field: copy.deepcopy(getattr(zone, field)) for field in ZONE_FIELDS}


class LayoutStore:
    """Queries over one layout kind's layouts, spaces and zones."""

    def __init__(self, db: AsyncSession, kind: LayoutKind):
        self.db = db
        self.kind = kind

    def _space_owner(self):
        return getattr(self.kind.space_model, self.kind.owner_field)

    def _zone_owner(self):
        return getattr(self.kind.zone_model, self.kind.owner_field)

    async def get_layout(self, layout_id: UUID):
        """
        Fetch a layout by id.

        Raises:
            NotFoundError: The kind's not-found error if the layout does not exist
        """
        layout = await self.db.get(self.kind.layout_model, layout_id)
        if layout is None:
            raise self.kind.not_found_error(str(layout_id))
        return layout

    async def list_spaces(self, layout_id: UUID, active_only: bool = False) -> List[Any]:
        """Spaces of a layout ordered by floor, row and column."""
        space_model = self.kind.space_model
        query = select(space_model).where(self._space_owner() == layout_id)
        if active_only:
            query = query.where(space_model.active.is_(True))
        query = query.order_by(
            space_model.floor_number,
            space_model.position_y,
            space_model.position_x
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    def add_spaces(self, layout_id: UUID, records: Iterable[Mapping[str, Any]]) -> List[Any]:
        """Stage new spaces built from creation records."""
        spaces = [
            self.kind.space_model(**copy.deepcopy(dict(record)), **{self.kind.owner_field: layout_id})
            for record in records
        ]
        self.db.add_all(spaces)
        return spaces

    async def delete_spaces(self, layout_id: UUID, space_ids: Optional[Sequence[UUID]] = None) -> int:
        """
        Hard-delete spaces of a layout right away.

        The statement runs immediately, so positions it frees can be reused
        by spaces added afterwards in the same transaction.

        Args:
            layout_id: Owning layout
            space_ids: Restrict the delete to these spaces (all spaces when None)

        Returns:
            Number of deleted rows
        """
        space_model = self.kind.space_model
        conditions = [self._space_owner() == layout_id]
        if space_ids is not None:
            if not space_ids:
                return 0
            conditions.append(space_model.id.in_(list(space_ids)))

        # RETURNING-based rowcounts are not reliable on every driver
        count = await self.db.execute(select(func.count(space_model.id)).where(*conditions))
        deleted = count.scalar_one()

        await self.db.execute(
            delete(space_model).where(*conditions).execution_options(synchronize_session="fetch")
        )
        return deleted

    async def count_active_seats(self, layout_id: UUID) -> int:
        """Count active seat-type spaces of a layout."""
        space_model = self.kind.space_model
        result = await self.db.execute(
            select(func.count(space_model.id)).where(
                self._space_owner() == layout_id,
                space_model.active.is_(True),
                space_model.space_type == SpaceType.SEAT
            )
        )
        return result.scalar_one()

    async def list_zones(self, layout_id: UUID) -> List[Any]:
        """Zones of a layout in creation order."""
        zone_model = self.kind.zone_model
        result = await self.db.execute(
            select(zone_model)
            .where(self._zone_owner() == layout_id)
            .order_by(zone_model.created_at, zone_model.name)
        )
        return list(result.scalars().all())

    async def get_zone(self, layout_id: UUID, zone_id: UUID):
        """
        Fetch a zone scoped to its owning layout.

        Raises:
            ZoneNotFoundError: If the zone does not exist in this layout
        """
        zone_model = self.kind.zone_model
        result = await self.db.execute(
            select(zone_model).where(zone_model.id == zone_id, self._zone_owner() == layout_id)
        )
        zone = result.scalar_one_or_none()
        if zone is None:
            raise ZoneNotFoundError(str(zone_id), str(layout_id))
        return zone

    def add_zones(self, layout_id: UUID, records: Iterable[Mapping[str, Any]]) -> List[Any]:
        """Stage new zones built from zone records."""
        zones = [
            self.kind.zone_model(**copy.deepcopy(dict(record)), **{self.kind.owner_field: layout_id})
            for record in records
        ]
        self.db.add_all(zones)
        return zones

    async def delete_zones(self, layout_id: UUID) -> int:
        """Hard-delete every zone of a layout right away."""
        zone_model = self.kind.zone_model
        count = await self.db.execute(select(func.count(zone_model.id)).where(self._zone_owner() == layout_id))
        deleted = count.scalar_one()

        await self.db.execute(
            delete(zone_model)
            .where(self._zone_owner() == layout_id)
            .execution_options(synchronize_session="fetch")
        )
        return deleted
