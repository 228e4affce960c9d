from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .base import PatchModel, RecordResponse


class CommentCreate(BaseModel):
    file_id: int = Field(..., description="File the comment belongs to")
    user_id: int = Field(..., description="Author")
    content: str = Field(..., min_length=1, description="Comment text")


class CommentUpdate(PatchModel):
    """Replacement text, validated like a new comment"""
    content: str = Field(..., min_length=1, description="Comment text")


class CommentResponse(RecordResponse):
    """Comment joined with its author's identity"""
    id: int
    file_id: int
    user_id: int
    content: str
    created_at: datetime
    updated_at: datetime
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_picture: Optional[str] = None
