"""Task PDF attachments shared by every content type."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from tutelage_api.core.database.base import BaseModel, BigIntPK

FILE_PATH_MAX_LENGTH = 1000
FILE_NAME_MAX_LENGTH = 500


class TaskPdf(BaseModel):
    """
    A PDF worksheet attached to a content resource.

    ``resource_type``/``resource_id`` point into one of the content tables
    chosen by type, so there is no foreign key: the parent is checked when
    the row is written, and rows outlive a deleted parent until purged.
    """

    __tablename__ = "task_pdfs"
    __table_args__ = (
        Index("ix_task_pdfs_resource", "resource_type", "resource_id"),
    )

    resource_type: Mapped[str] = mapped_column(String(50), nullable=False)
    resource_id: Mapped[int] = mapped_column(BigIntPK, nullable=False)
    file_path: Mapped[str] = mapped_column(String(FILE_PATH_MAX_LENGTH), nullable=False)
    file_name: Mapped[str] = mapped_column(String(FILE_NAME_MAX_LENGTH), nullable=False)
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<TaskPdf id={self.id} {self.resource_type}:{self.resource_id} {self.file_name!r}>"
