"""
Validation of batch space edits before anything is persisted.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models.space import SpaceType
from ..schemas.layout import SpaceConfigurationInput
from ..utils.exceptions import ValidationError
from ..utils.position import key_for
from .layout_generator import find_floor_configuration, row_width

logger = logging.getLogger(__name__)


def _raise_if_any(message: str, field_errors: Dict[str, List[str]]) -> None:
    if field_errors:
        raise ValidationError(message, field_errors=field_errors)


def _has_seat_number(entry: SpaceConfigurationInput) -> bool:
    return entry.seat_number is not None and entry.seat_number.strip() != ""


def validate_space_configurations(
    spaces: Sequence[SpaceConfigurationInput],
    num_floors: Optional[int] = None,
    seats_per_floor: Optional[Sequence[Mapping[str, Any]]] = None
) -> None:
    """
    Validate a batch of desired spaces.

    Checks run in order over the whole batch and the first failing check
    raises: identification fields, seat numbers on seats, duplicate
    positions, duplicate seat numbers, then layout bounds when
    ``num_floors`` is given.

    Args:
        spaces: Incoming space configurations
        num_floors: Floor count of the target layout (enables bounds checks)
        seats_per_floor: Floor configurations of the target layout

    Raises:
        ValidationError: With ``field_errors`` keyed by ``spaces[i].<field>``
    """
    errors: Dict[str, List[str]] = {}
    for index, entry in enumerate(spaces):
        if not entry.floor_number or entry.position is None:
            errors[f"spaces[{index}]"] = ["floor_number and position are required"]
    _raise_if_any(
        "Missing required fields: floor_number and position are required for space identification",
        errors
    )

    for index, entry in enumerate(spaces):
        if entry.space_type == SpaceType.SEAT and not _has_seat_number(entry):
            errors[f"spaces[{index}].seat_number"] = ["Seat number is required for seat spaces"]
    _raise_if_any("Seat number is required for SEAT space types", errors)

    seen_positions: Dict[str, int] = {}
    for index, entry in enumerate(spaces):
        key = key_for(entry.floor_number, entry.position.model_dump())
        if key in seen_positions:
            errors[f"spaces[{index}].position"] = [
                f"Duplicate position {key} (first used by spaces[{seen_positions[key]}])"
            ]
        else:
            seen_positions[key] = index
    _raise_if_any("Duplicate positions found in payload", errors)

    seen_seat_numbers: Dict[str, int] = {}
    for index, entry in enumerate(spaces):
        if entry.space_type != SpaceType.SEAT:
            continue
        if entry.seat_number in seen_seat_numbers:
            errors[f"spaces[{index}].seat_number"] = [
                f"Duplicate seat number {entry.seat_number} "
                f"(first used by spaces[{seen_seat_numbers[entry.seat_number]}])"
            ]
        else:
            seen_seat_numbers[entry.seat_number] = index
    _raise_if_any("Duplicate seat numbers found in payload", errors)

    if num_floors is not None:
        _validate_bounds(spaces, num_floors, seats_per_floor)


def _validate_bounds(
    spaces: Sequence[SpaceConfigurationInput],
    num_floors: int,
    seats_per_floor: Optional[Sequence[Mapping[str, Any]]]
) -> None:
    errors: Dict[str, List[str]] = {}
    first_message: Optional[str] = None

    def add(field: str, message: str) -> None:
        nonlocal first_message
        errors.setdefault(field, []).append(message)
        first_message = first_message or message

    for index, entry in enumerate(spaces):
        floor_number = entry.floor_number
        x, y = entry.position.x, entry.position.y

        if floor_number < 1 or floor_number > num_floors:
            add(
                f"spaces[{index}].floor_number",
                f"Invalid floor number {floor_number}. Must be between 1 and {num_floors}"
            )
            continue

        floor = find_floor_configuration(seats_per_floor, floor_number)
        if floor is None:
            add(
                f"spaces[{index}].floor_number",
                f"Floor configuration not found for floor {floor_number}"
            )
            continue

        if y < 1 or y > floor["num_rows"]:
            add(
                f"spaces[{index}].position.y",
                f"Invalid row number {y} for floor {floor_number}. Must be between 1 and {floor['num_rows']}"
            )

        # Any column up to the right window column, the aisle included
        last_column = row_width(floor)
        if x < 0 or x > last_column:
            add(
                f"spaces[{index}].position.x",
                f"Invalid column number {x} for floor {floor_number}. Must be between 0 and {last_column}"
            )

    if errors:
        logger.info("Rejected space batch with %d out-of-bounds entries", len(errors))
        raise ValidationError(first_message, field_errors=errors)
