"""
Template-to-seat-diagram synchronization.
"""

import copy
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..cache import layout_lock
from ..models.layout import SeatDiagram
from ..schemas.layout import SeatDiagramSyncFailure, SeatDiagramSyncSummary, TemplateSyncResult
from ..utils.logging_config import log_business_event, log_performance
from .layout_store import SEAT_DIAGRAM, SPACE_FIELDS, TEMPLATE, LayoutStore, space_to_record, zone_to_record
from .zone_service import clone_zones

logger = logging.getLogger(__name__)

# Shape fields copied from a template; the diagram keeps its own name
STRUCTURAL_FIELDS = (
    "max_capacity",
    "num_floors",
    "seats_per_floor",
    "total_seats",
    "is_factory_default",
)


@dataclass
class TemplateSnapshot:
    """Plain copy of a template's shape, active spaces and zones."""
    template_id: UUID
    fields: Dict[str, Any]
    spaces: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    zones: List[Dict[str, Any]] = field(default_factory=list)


def record_differs(space, record: Dict[str, Any]) -> bool:
    return any(getattr(space, name) != record[name] for name in SPACE_FIELDS)


class TemplateSyncService:
    """Service pushing template changes down to unmodified seat diagrams."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.templates = LayoutStore(db, TEMPLATE)
        self.seat_diagrams = LayoutStore(db, SEAT_DIAGRAM)

    async def snapshot_template(self, template_id: UUID) -> TemplateSnapshot:
        """
        Read a template into plain data.

        The snapshot stays usable after a rollback expires the ORM rows.

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
        """
        template = await self.templates.get_layout(template_id)
        spaces = await self.templates.list_spaces(template_id, active_only=True)
        zones = await self.templates.list_zones(template_id)

        return TemplateSnapshot(
            template_id=template_id,
            fields={name: copy.deepcopy(getattr(template, name)) for name in STRUCTURAL_FIELDS},
            spaces={space.position_key: space_to_record(space) for space in spaces},
            zones=[zone_to_record(zone) for zone in zones],
        )

    async def apply_snapshot(self, snapshot: TemplateSnapshot, seat_diagram: SeatDiagram) -> SeatDiagramSyncSummary:
        """
        Make a seat diagram match a template snapshot, without committing.

        Shape fields are copied, spaces are diffed by position (missing ones
        created, changed ones rewritten, extra ones deleted) and zones are
        replaced by copies of the template's zones.
        """
        for name in STRUCTURAL_FIELDS:
            setattr(seat_diagram, name, copy.deepcopy(snapshot.fields[name]))

        existing = {
            space.position_key: space
            for space in await self.seat_diagrams.list_spaces(seat_diagram.id)
        }

        new_records = []
        updated = 0
        for key, record in snapshot.spaces.items():
            space = existing.get(key)
            if space is None:
                new_records.append(record)
            elif record_differs(space, record):
                for name in SPACE_FIELDS:
                    setattr(space, name, copy.deepcopy(record[name]))
                updated += 1

        stale_ids = [space.id for key, space in existing.items() if key not in snapshot.spaces]
        deleted = await self.seat_diagrams.delete_spaces(seat_diagram.id, stale_ids)
        self.seat_diagrams.add_spaces(seat_diagram.id, new_records)

        await self.seat_diagrams.delete_zones(seat_diagram.id)
        clone_zones(self.seat_diagrams, seat_diagram.id, snapshot.zones)
        await self.db.flush()

        return SeatDiagramSyncSummary(
            seat_diagram_id=seat_diagram.id,
            created=len(new_records),
            updated=updated,
            deleted=deleted,
        )

    async def sync_template_to_seat_diagrams(self, template_id: UUID) -> TemplateSyncResult:
        """
        Push a template's current shape, spaces and zones to its seat diagrams.

        Diagrams flagged as modified are skipped and left untouched. Each
        remaining diagram is synchronized and committed on its own; a failure
        rolls back that diagram only and is reported in ``failed`` while the
        other diagrams continue.

        Args:
            template_id: Template to push

        Returns:
            Per-diagram change counts, skipped diagram ids and failures

        Raises:
            LayoutTemplateNotFoundError: If the template does not exist
        """
        start_time = time.perf_counter()
        async with layout_lock(TEMPLATE.name, template_id):
            snapshot = await self.snapshot_template(template_id)

            result = await self.db.execute(
                select(SeatDiagram.id)
                .where(SeatDiagram.layout_template_id == template_id)
                .order_by(SeatDiagram.created_at, SeatDiagram.id)
            )
            seat_diagram_ids = list(result.scalars().all())

            sync_result = TemplateSyncResult(layout_template_id=template_id)

            for seat_diagram_id in seat_diagram_ids:
                try:
                    async with layout_lock(SEAT_DIAGRAM.name, seat_diagram_id):
                        seat_diagram = await self.db.get(SeatDiagram, seat_diagram_id, populate_existing=True)
                        if seat_diagram is None:
                            continue
                        if seat_diagram.is_modified:
                            sync_result.skipped.append(seat_diagram_id)
                            continue

                        summary = await self.apply_snapshot(snapshot, seat_diagram)
                        await self.db.commit()

                    sync_result.synced.append(summary)

                except Exception as e:
                    # One diagram failing must not stop the others
                    await self.db.rollback()
                    logger.exception(f"Failed to sync seat diagram {seat_diagram_id} from template {template_id}")
                    sync_result.failed.append(
                        SeatDiagramSyncFailure(seat_diagram_id=seat_diagram_id, error=str(e))
                    )

        log_performance(
            "template_sync",
            time.perf_counter() - start_time,
            template_id=str(template_id),
            seat_diagram_count=len(seat_diagram_ids)
        )
        logger.info(
            f"Synced template {template_id}: {len(sync_result.synced)} synced, "
            f"{len(sync_result.skipped)} skipped, {len(sync_result.failed)} failed"
        )
        log_business_event(
            "template_synced",
            {
                "template_id": str(template_id),
                "synced": len(sync_result.synced),
                "skipped": len(sync_result.skipped),
                "failed": len(sync_result.failed),
            }
        )
        return sync_result
