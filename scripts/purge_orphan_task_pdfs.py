#!/usr/bin/env python3
"""
Remove task PDFs whose parent content resource no longer exists.

Deleting a video/blog/story... does not cascade to task_pdfs (there is no
foreign key across the nine content tables), so rows can be left behind.

Usage:
    python scripts/purge_orphan_task_pdfs.py --dry-run  # list only
    python scripts/purge_orphan_task_pdfs.py --confirm  # delete
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.config import settings
from tutelage_api.core.database.session import async_session
from tutelage_api.modules.resources.registry import ResourceRegistry, build_default_registry
from tutelage_api.modules.task_pdfs.models import TaskPdf
from tutelage_api.modules.task_pdfs.service import TaskPdfService

logger = logging.getLogger("purge_orphan_task_pdfs")


async def purge_orphans(
    session: AsyncSession,
    registry: ResourceRegistry,
    dry_run: bool = True,
) -> list[TaskPdf]:
    """Find orphaned task PDFs and, unless dry_run, delete them in one transaction."""
    orphans = await TaskPdfService(session, registry).find_orphans()

    for row in orphans:
        logger.info(
            "orphan id=%s %s:%s %s", row.id, row.resource_type, row.resource_id, row.file_name
        )

    if dry_run or not orphans:
        return orphans

    try:
        await session.execute(delete(TaskPdf).where(TaskPdf.id.in_([r.id for r in orphans])))
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception("Purge failed, rolled back")
        raise

    logger.info("Deleted %d orphaned task PDF(s)", len(orphans))
    return orphans


async def main() -> None:
    parser = argparse.ArgumentParser(description="Remove task PDFs of deleted content resources")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", action="store_true", help="List orphans without deleting (default)")
    mode.add_argument("--confirm", action="store_true", help="Delete the orphans")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(message)s")
    dry_run = not args.confirm

    db_host = settings.database_url.split("@")[1] if "@" in settings.database_url else "unknown"
    logger.info("Environment: %s, database: %s, mode: %s", settings.app_env, db_host, "dry-run" if dry_run else "delete")

    async with async_session() as session:
        orphans = await purge_orphans(session, build_default_registry(), dry_run=dry_run)

    if dry_run and orphans:
        logger.info("%d orphan(s) found. Re-run with --confirm to delete them.", len(orphans))
    elif not orphans:
        logger.info("No orphaned task PDFs.")


if __name__ == "__main__":
    asyncio.run(main())
