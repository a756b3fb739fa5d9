from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.auth.dependencies import EditorUser
from tutelage_api.core.database import get_db
from tutelage_api.modules.resources.registry import ResourceRegistry, get_resource_registry
from tutelage_api.modules.task_pdfs.schemas import TaskPdfBatchCreate, TaskPdfResponse
from tutelage_api.modules.task_pdfs.service import TaskPdfService
from tutelage_api.shared.schemas import AckResponse, SuccessResponse

router = APIRouter(prefix="/task-pdfs", tags=["Task PDFs"])

# Identifiers stay strings here: the registry validates them so a malformed
# type or id gets the same 404 as a missing resource.


@router.get(
    "/{resource_type}/{resource_id}",
    response_model=SuccessResponse[list[TaskPdfResponse]],
    response_model_exclude={"message"},
)
async def list_task_pdfs(
    resource_type: str,
    resource_id: str,
    db: AsyncSession = Depends(get_db),
    registry: ResourceRegistry = Depends(get_resource_registry),
):
    """List the task PDFs of a content resource, newest id first."""
    service = TaskPdfService(db, registry)
    rows = await service.list_task_pdfs(resource_type, resource_id)
    return SuccessResponse(data=[TaskPdfResponse.model_validate(r) for r in rows])


@router.post(
    "/{resource_type}/{resource_id}",
    response_model=SuccessResponse[list[TaskPdfResponse]],
    status_code=status.HTTP_201_CREATED,
    response_model_exclude={"message"},
)
async def add_task_pdfs(
    resource_type: str,
    resource_id: str,
    current_user: EditorUser,
    data: TaskPdfBatchCreate | None = None,
    db: AsyncSession = Depends(get_db),
    registry: ResourceRegistry = Depends(get_resource_registry),
):
    """
    Attach PDFs (already uploaded, referenced by URL) to a content resource.

    Entries missing filePath or fileName are skipped; if none remain the
    request fails with 400 "No valid PDFs".
    """
    service = TaskPdfService(db, registry)
    candidates = data.task_pdfs if data else []
    rows = await service.add_task_pdfs(resource_type, resource_id, candidates)
    return SuccessResponse(data=[TaskPdfResponse.model_validate(r) for r in rows])


@router.delete("/{resource_type}/{resource_id}/{task_pdf_id}", response_model=AckResponse)
async def delete_task_pdf(
    resource_type: str,
    resource_id: str,
    task_pdf_id: str,
    current_user: EditorUser,
    db: AsyncSession = Depends(get_db),
    registry: ResourceRegistry = Depends(get_resource_registry),
):
    """Remove one task PDF of a content resource."""
    service = TaskPdfService(db, registry)
    await service.delete_task_pdf(resource_type, resource_id, task_pdf_id)
    return AckResponse()
