"""
Database models for the Fleet Inventory platform.
"""

from .base import Base
from .layout import LayoutTemplate, SeatDiagram
from .space import SpaceType, SeatType, TemplateSpace, SeatDiagramSpace
from .zone import TemplateZone, SeatDiagramZone
from .bus import Bus, BusStatus

__all__ = [
    "Base",
    "LayoutTemplate",
    "SeatDiagram",
    "SpaceType",
    "SeatType",
    "TemplateSpace",
    "SeatDiagramSpace",
    "TemplateZone",
    "SeatDiagramZone",
    "Bus",
    "BusStatus",
]
