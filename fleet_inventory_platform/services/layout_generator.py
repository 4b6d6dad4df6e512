"""
Procedural seat generation from a compact floor configuration.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..config import get_settings
from ..models.space import SpaceType, SeatType
from ..utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

SEAT_META_KEYS = ("is_window", "is_legroom")


def find_floor_configuration(
    seats_per_floor: Optional[Sequence[Mapping[str, Any]]],
    floor_number: int
) -> Optional[Mapping[str, Any]]:
    """Return the configuration of ``floor_number`` or None."""
    for floor in seats_per_floor or []:
        if floor.get("floor_number") == floor_number:
            return floor
    return None


def row_width(floor: Mapping[str, Any]) -> int:
    """Index of the last column of a floor: left seats, the aisle, then right seats."""
    return floor["seats_left"] + floor["seats_right"]


def calculate_space_meta(
    x: int,
    y: int,
    space_type: SpaceType = SpaceType.SEAT,
    floor: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Derive the meta block of a cell.

    Every cell carries ``row_index`` and ``col_index``. Seats also get
    ``is_window`` (outermost column on either side) and ``is_legroom``
    (first row).

    Args:
        x: Column index (0-based)
        y: Row number (1-based)
        space_type: Cell type
        floor: Floor configuration, required for seats

    Returns:
        Meta dictionary
    """
    meta: Dict[str, Any] = {"row_index": y - 1, "col_index": x}
    if space_type == SpaceType.SEAT:
        # The aisle takes column seats_left, so the outermost right seat sits at seats_left + seats_right
        last_column = row_width(floor) if floor else None
        meta["is_window"] = x == 0 or x == last_column
        meta["is_legroom"] = y == 1
    return meta


def strip_seat_meta(meta: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop seat-only keys from a meta block."""
    return {key: value for key, value in (meta or {}).items() if key not in SEAT_META_KEYS}


def generate_space_records(
    num_floors: int,
    seats_per_floor: Sequence[Mapping[str, Any]],
    default_seat_type: Optional[SeatType] = None,
    default_reclinement_angle: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Generate the seat records of a whole layout.

    Floors are processed in ascending order. Each row emits the left seats at
    columns ``0..seats_left-1`` and the right seats after the aisle column
    ``seats_left``. Seat numbers come from one counter across the whole
    layout, starting at 1.

    Args:
        num_floors: Number of floors
        seats_per_floor: Floor configurations
        default_seat_type: Seat class for generated seats
        default_reclinement_angle: Reclinement angle for generated seats

    Returns:
        Ordered list of space creation records (column values without owner id)

    Raises:
        ValidationError: If a floor has no configuration or no seat is generated
    """
    settings = get_settings()
    seat_type = default_seat_type or SeatType(settings.default_seat_type)
    reclinement_angle = (
        default_reclinement_angle
        if default_reclinement_angle is not None
        else settings.default_reclinement_angle
    )

    records: List[Dict[str, Any]] = []
    seat_counter = 1

    for floor_number in range(1, num_floors + 1):
        floor = find_floor_configuration(seats_per_floor, floor_number)
        if floor is None:
            raise ValidationError(
                f"Floor configuration not found for floor {floor_number}",
                field_errors={"seats_per_floor": [f"Missing configuration for floor {floor_number}"]}
            )

        right_columns = range(floor["seats_left"] + 1, floor["seats_left"] + 1 + floor["seats_right"])
        columns = list(range(floor["seats_left"])) + list(right_columns)

        for row_index in range(floor["num_rows"]):
            y = row_index + 1
            for x in columns:
                records.append({
                    "floor_number": floor_number,
                    "position_x": x,
                    "position_y": y,
                    "space_type": SpaceType.SEAT,
                    "seat_number": str(seat_counter),
                    "seat_type": seat_type,
                    "reclinement_angle": reclinement_angle,
                    "amenities": [],
                    "meta": calculate_space_meta(x, y, SpaceType.SEAT, floor),
                    "active": True,
                })
                seat_counter += 1

    if not records:
        raise ValidationError(
            "Invalid seats_per_floor configuration: no seats would be generated",
            field_errors={"seats_per_floor": ["At least one floor must have rows and seats"]}
        )

    logger.debug("Generated %d seats across %d floors", len(records), num_floors)
    return records
