"""Business logic services for the Fleet Inventory Platform."""

from .template_service import TemplateService
from .seat_diagram_service import SeatDiagramService
from .reconciliation_service import ReconciliationService
from .template_sync_service import TemplateSyncService
from .zone_service import ZoneService
from .bus_service import BusService

__all__ = [
    "TemplateService",
    "SeatDiagramService",
    "ReconciliationService",
    "TemplateSyncService",
    "ZoneService",
    "BusService",
]
