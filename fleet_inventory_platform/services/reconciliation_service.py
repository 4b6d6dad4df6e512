"""
Reconciliation of a layout's spaces against a batch of desired space configurations.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..cache import layout_lock
from ..config import get_settings
from ..models.space import SpaceType, SeatType
from ..schemas.layout import ReconciliationResult, SpaceConfigurationInput
from ..utils.logging_config import log_business_event
from ..utils.position import key_for
from .layout_generator import calculate_space_meta, find_floor_configuration, strip_seat_meta
from .layout_store import LayoutKind, LayoutStore
from .space_validator import validate_space_configurations

logger = logging.getLogger(__name__)


def desired_active(entry: SpaceConfigurationInput) -> bool:
    return True if entry.active is None else entry.active


def _default_seat_type() -> SeatType:
    return SeatType(get_settings().default_seat_type)


def build_space_record(entry: SpaceConfigurationInput, floor: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Creation record for a space that does not exist yet."""
    x, y = entry.position.x, entry.position.y
    record = {
        "floor_number": entry.floor_number,
        "position_x": x,
        "position_y": y,
        "space_type": entry.space_type,
        "seat_number": None,
        "seat_type": None,
        "reclinement_angle": None,
        "amenities": [],
        "meta": calculate_space_meta(x, y, entry.space_type, floor),
        "active": desired_active(entry),
    }
    if entry.space_type == SpaceType.SEAT:
        record["seat_number"] = entry.seat_number
        record["amenities"] = list(entry.amenities or [])
        record["seat_type"] = entry.seat_type or _default_seat_type()
        record["reclinement_angle"] = (
            entry.reclinement_angle
            if entry.reclinement_angle is not None
            else get_settings().default_reclinement_angle
        )
    return record


def needs_update(space, entry: SpaceConfigurationInput) -> bool:
    """
    Whether an existing space differs from its desired configuration.

    Seat attributes are only compared when both sides are seats. Optional
    seat attributes missing from the entry are left as they are.
    """
    if space.space_type != entry.space_type:
        return True

    if entry.space_type == SpaceType.SEAT:
        if space.seat_number != entry.seat_number:
            return True
        if entry.seat_type is not None and space.seat_type != entry.seat_type:
            return True
        if entry.amenities is not None and set(space.amenities or []) != set(entry.amenities):
            return True
        if entry.reclinement_angle is not None and space.reclinement_angle != entry.reclinement_angle:
            return True

    return space.active != desired_active(entry)


def apply_update(space, entry: SpaceConfigurationInput, floor: Optional[Mapping[str, Any]]) -> None:
    """Rewrite an existing space to match its desired configuration."""
    was_seat = space.space_type == SpaceType.SEAT
    x, y = space.position_x, space.position_y
    space.space_type = entry.space_type

    if entry.space_type == SpaceType.SEAT:
        space.seat_number = entry.seat_number
        if entry.seat_type is not None:
            space.seat_type = entry.seat_type
        elif space.seat_type is None:
            space.seat_type = _default_seat_type()
        if entry.reclinement_angle is not None:
            space.reclinement_angle = entry.reclinement_angle
        elif space.reclinement_angle is None:
            space.reclinement_angle = get_settings().default_reclinement_angle
        if entry.amenities is not None:
            space.amenities = list(entry.amenities)
        if not was_seat:
            space.meta = {**(space.meta or {}), **calculate_space_meta(x, y, SpaceType.SEAT, floor)}
    else:
        space.seat_number = None
        space.seat_type = None
        space.reclinement_angle = None
        space.amenities = []
        if was_seat:
            space.meta = {**strip_seat_meta(space.meta), **calculate_space_meta(x, y, entry.space_type)}

    space.active = desired_active(entry)


class ReconciliationService:
    """Service applying batch space edits to templates and seat diagrams."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reconcile_spaces(
        self,
        kind: LayoutKind,
        layout_id: UUID,
        spaces: Sequence[SpaceConfigurationInput]
    ) -> ReconciliationResult:
        """
        Make a layout's spaces match a batch of desired configurations.

        Spaces are matched by position. Unknown positions are created,
        changed ones updated, and active spaces missing from the batch are
        deactivated. Deactivated spaces stay matchable, so sending a position
        again revives its space. The layout's ``total_seats`` becomes the
        number of active seats, and seat diagrams are flagged as modified.
        Everything is committed in one transaction.

        Args:
            kind: Layout kind (template or seat diagram)
            layout_id: Layout to edit
            spaces: Complete desired set of spaces

        Returns:
            Counts of created, updated and deactivated spaces and the new seat total

        Raises:
            NotFoundError: If the layout does not exist
            ValidationError: If the batch is invalid for the layout
        """
        async with layout_lock(kind.name, layout_id):
            store = LayoutStore(self.db, kind)
            try:
                layout = await store.get_layout(layout_id)
                validate_space_configurations(spaces, layout.num_floors, layout.seats_per_floor)

                existing = {space.position_key: space for space in await store.list_spaces(layout_id)}
                seen = set()
                new_records = []
                updated = 0

                for entry in spaces:
                    key = key_for(entry.floor_number, entry.position.model_dump())
                    seen.add(key)
                    floor = find_floor_configuration(layout.seats_per_floor, entry.floor_number)
                    space = existing.get(key)

                    if space is None:
                        new_records.append(build_space_record(entry, floor))
                    elif needs_update(space, entry):
                        apply_update(space, entry, floor)
                        updated += 1

                deactivated = 0
                for key, space in existing.items():
                    if key not in seen and space.active:
                        space.active = False
                        deactivated += 1

                store.add_spaces(layout_id, new_records)
                await self.db.flush()

                total_active_seats = await store.count_active_seats(layout_id)
                layout.total_seats = total_active_seats
                if kind.tracks_modification:
                    layout.is_modified = True

                await self.db.commit()

            except Exception:
                await self.db.rollback()
                raise

        result = ReconciliationResult(
            created=len(new_records),
            updated=updated,
            deactivated=deactivated,
            total_active_seats=total_active_seats
        )
        logger.info(
            "Reconciled %s %s: %d created, %d updated, %d deactivated, %d active seats",
            kind.name, layout_id, result.created, result.updated, result.deactivated,
            result.total_active_seats
        )
        log_business_event(
            "seat_configuration_reconciled",
            {
                "layout_kind": kind.name,
                "layout_id": str(layout_id),
                "spaces_created": result.created,
                "spaces_updated": result.updated,
                "spaces_deactivated": result.deactivated,
                "total_active_seats": result.total_active_seats,
            }
        )
        return result
