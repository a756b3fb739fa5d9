"""Service for listing, attaching and removing task PDFs."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.exceptions import NoValidAttachmentsError, ResourceNotFoundError
from tutelage_api.modules.resources.registry import (
    ResourceRegistry,
    ResourceType,
    parse_resource_id,
)
from tutelage_api.modules.task_pdfs.models import TaskPdf
from tutelage_api.modules.task_pdfs.schemas import TaskPdfCandidate

logger = logging.getLogger(__name__)


def filter_candidates(candidates: Iterable[Any]) -> list[TaskPdfCandidate]:
    """Keep the batch entries that carry a usable file path and file name."""
    valid: list[TaskPdfCandidate] = []
    for raw in candidates:
        if isinstance(raw, TaskPdfCandidate):
            valid.append(raw)
            continue
        if not isinstance(raw, dict):
            continue
        try:
            valid.append(TaskPdfCandidate.model_validate(raw))
        except PydanticValidationError:
            continue
    return valid


class TaskPdfService:
    """PDF attachments of any content resource, addressed by (resource_type, resource_id)."""

    def __init__(self, session: AsyncSession, registry: ResourceRegistry):
        self.session = session
        self.registry = registry

    async def _require_resource(self, resource_type: Any, resource_id: Any) -> tuple[ResourceType, int]:
        """Validated (type, id) of an existing parent resource."""
        resource = await self.registry.resolve(self.session, resource_type, resource_id)
        if resource is None:
            raise ResourceNotFoundError(resource_type, resource_id)
        return ResourceType(resource_type), parse_resource_id(resource_id)

    async def list_task_pdfs(self, resource_type: Any, resource_id: Any) -> list[TaskPdf]:
        """All attachments of the resource, highest id first."""
        rtype, rid = await self._require_resource(resource_type, resource_id)
        stmt = (
            select(TaskPdf)
            .where(TaskPdf.resource_type == rtype.value, TaskPdf.resource_id == rid)
            .order_by(TaskPdf.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_task_pdfs(
        self,
        resource_type: Any,
        resource_id: Any,
        candidates: Iterable[Any],
    ) -> list[TaskPdf]:
        """
        Attach a batch of PDFs to the resource.

        Entries without a non-empty ``filePath`` and ``fileName`` are dropped.
        All surviving rows are inserted in one flush of the current
        transaction, so the batch is stored entirely or not at all.

        Raises:
            ResourceNotFoundError: parent resource does not resolve
            NoValidAttachmentsError: nothing left after filtering
        """
        rtype, rid = await self._require_resource(resource_type, resource_id)

        valid = filter_candidates(candidates)
        if not valid:
            raise NoValidAttachmentsError()

        now = datetime.now(timezone.utc)
        rows = [
            TaskPdf(
                resource_type=rtype.value,
                resource_id=rid,
                file_path=c.file_path,
                file_name=c.file_name,
                file_size=c.file_size,
                upload_date=c.upload_date or now,
            )
            for c in valid
        ]
        self.session.add_all(rows)
        await self.session.flush()
        for row in rows:
            await self.session.refresh(row)

        logger.info("Attached %d task PDF(s) to %s id=%s", len(rows), rtype.value, rid)
        return rows

    async def delete_task_pdf(self, resource_type: Any, resource_id: Any, task_pdf_id: Any) -> None:
        """Delete one attachment; id, type and parent id must all match."""
        rtype, rid = await self._require_resource(resource_type, resource_id)

        pdf_id = parse_resource_id(task_pdf_id)
        if pdf_id is None:
            raise ResourceNotFoundError("task_pdf", task_pdf_id)

        stmt = select(TaskPdf).where(
            TaskPdf.id == pdf_id,
            TaskPdf.resource_type == rtype.value,
            TaskPdf.resource_id == rid,
        )
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            raise ResourceNotFoundError("task_pdf", task_pdf_id)

        await self.session.delete(row)
        await self.session.flush()
        logger.info("Deleted task PDF id=%s from %s id=%s", pdf_id, rtype.value, rid)

    async def delete_all_for_resource(self, resource_type: ResourceType | str, resource_id: int) -> int:
        """
        Remove every attachment of a resource; returns the number of rows deleted.

        Meant for the content delete flow, so the parent is not required to
        exist any more. Not called automatically when a parent is deleted.
        """
        stmt = delete(TaskPdf).where(
            TaskPdf.resource_type == str(resource_type),
            TaskPdf.resource_id == resource_id,
        )
        result = await self.session.execute(stmt)
        deleted = result.rowcount or 0
        if deleted:
            logger.info("Deleted %d task PDF(s) of %s id=%s", deleted, resource_type, resource_id)
        return deleted

    async def find_orphans(self) -> list[TaskPdf]:
        """Attachments whose parent row is gone or whose type is no longer registered."""
        result = await self.session.execute(select(TaskPdf).order_by(TaskPdf.id))
        rows = list(result.scalars().all())

        by_type: dict[str, list[TaskPdf]] = defaultdict(list)
        for row in rows:
            by_type[row.resource_type].append(row)

        orphans: list[TaskPdf] = []
        for resource_type, typed_rows in by_type.items():
            lookup = self.registry.lookup_for(resource_type)
            if lookup is None:
                orphans.extend(typed_rows)
                continue
            existing = await lookup.existing_ids(self.session, {r.resource_id for r in typed_rows})
            orphans.extend(r for r in typed_rows if r.resource_id not in existing)

        orphans.sort(key=lambda r: r.id)
        return orphans
