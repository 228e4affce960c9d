from .activity import ActivityLogCreate, ActivityLogResponse
from .base import Base, PatchModel, RecordResponse, utcnow
from .comments import CommentCreate, CommentResponse, CommentUpdate
from .files import FileCreate, FileResponse, FileUpdate
from .users import UserCreate, UserResponse, UserSummary, UserUpdate, normalize_email

__all__ = [
    # Base
    'Base', 'PatchModel', 'RecordResponse', 'utcnow',

    # User schemas
    'UserCreate', 'UserUpdate', 'UserSummary', 'UserResponse', 'normalize_email',

    # Activity log schemas
    'ActivityLogCreate', 'ActivityLogResponse',

    # File schemas
    'FileCreate', 'FileUpdate', 'FileResponse',

    # Comment schemas
    'CommentCreate', 'CommentUpdate', 'CommentResponse',
]
