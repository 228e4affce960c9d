from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .base import RecordResponse


class ActivityLogCreate(BaseModel):
    """Audit entry payload"""
    user_id: Optional[int] = Field(None, description="Acting user, if any")
    action: str = Field(..., min_length=1, max_length=100, description="Action label")
    details: Optional[str] = Field(None, description="Free-form details")
    ip_address: Optional[str] = Field(None, max_length=45, description="Origin address")


class ActivityLogResponse(RecordResponse):
    id: int
    user_id: Optional[int] = None
    action: str
    details: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: datetime
    user_name: Optional[str] = Field(None, description="Acting user's name, None once deleted")
    user_email: Optional[str] = Field(None, description="Acting user's email, None once deleted")
