"""
Position keys identify a layout cell by floor and grid coordinates.
"""

from typing import Any, Mapping


def position_key(floor_number: int, x: int, y: int) -> str:
    """
    Build the canonical key of a cell, e.g. ``"1:3:5"``.

    The separator keeps keys unambiguous, so (1, 23, 4) and (12, 3, 4) never collide.
    """
    return f"{floor_number}:{x}:{y}"


def key_for(floor_number: int, position: Mapping[str, Any]) -> str:
    """Position key for a ``{"x": ..., "y": ...}`` mapping."""
    return position_key(floor_number, position["x"], position["y"])
