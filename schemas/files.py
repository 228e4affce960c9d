from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import PatchModel, RecordResponse


class FileCreate(BaseModel):
    """Metadata for a file that has already been stored on disk"""
    filename: str = Field(..., min_length=1, description="Stored filename")
    original_name: str = Field(..., min_length=1, description="Filename as uploaded")
    file_path: str = Field(..., min_length=1, description="Storage path")
    file_size: int = Field(..., ge=0, description="File size in bytes")
    mime_type: Optional[str] = Field(None, description="File content type")
    description: Optional[str] = Field(None, description="Free-form description")
    uploaded_by: int = Field(..., description="Owning user id")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "filename": "1718000000000-report.pdf",
                "original_name": "report.pdf",
                "file_path": "uploads/1718000000000-report.pdf",
                "file_size": 1024000,
                "mime_type": "application/pdf",
                "description": "Quarterly report",
                "uploaded_by": 1,
            }
        }
    )


class FileUpdate(PatchModel):
    """Editable file metadata; updated_at is always refreshed by the service"""
    non_nullable = ("filename", "original_name", "file_path", "file_size")

    filename: Optional[str] = Field(None, min_length=1)
    original_name: Optional[str] = Field(None, min_length=1)
    file_path: Optional[str] = Field(None, min_length=1)
    file_size: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = None
    description: Optional[str] = None


class FileResponse(RecordResponse):
    """File record joined with uploader identity"""
    id: int
    filename: str
    original_name: str
    file_path: str
    file_size: int
    mime_type: Optional[str] = None
    description: Optional[str] = None
    uploaded_by: int
    created_at: datetime
    updated_at: datetime
    uploader_name: Optional[str] = None
    uploader_email: Optional[str] = None
