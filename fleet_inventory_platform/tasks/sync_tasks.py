"""
Celery tasks for pushing layout templates to their seat diagrams.
"""

import asyncio
import logging
from uuid import UUID

from .celery_app import celery_app
from ..database import close_database, get_db_session, init_database
from ..services.template_sync_service import TemplateSyncService

logger = logging.getLogger(__name__)


async def run_template_sync(template_id: UUID) -> dict:
    """
    Synchronize one template's seat diagrams in a fresh session.

    Returns:
        The sync result as JSON-compatible data
    """
    async with get_db_session() as session:
        result = await TemplateSyncService(session).sync_template_to_seat_diagrams(template_id)
    return result.model_dump(mode="json")


@celery_app.task(bind=True, name="sync_template_instances_task")
def sync_template_instances_task(self, template_id: str):
    """
    Push a template's shape, spaces and zones to its unmodified seat diagrams.

    Each seat diagram is committed on its own, so a failing diagram is
    reported in the result without undoing the others.

    Args:
        template_id: Template UUID as a string
    """
    async def _sync():
        await init_database()
        try:
            logger.info(f"Starting template sync task for template {template_id}")
            return await run_template_sync(UUID(template_id))
        finally:
            await close_database()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        result = loop.run_until_complete(_sync())
    except Exception as e:
        logger.error(f"Error in template sync task for template {template_id}: {e}")
        raise
    finally:
        loop.close()

    logger.info(
        f"Template sync task finished for template {template_id}: "
        f"{len(result['synced'])} synced, {len(result['skipped'])} skipped, {len(result['failed'])} failed"
    )
    return result
