from .activity_log_service import ActivityLogService
from .comment_service import CommentService
from .file_service import FileService
from .gateway import PersistenceGateway
from .settings_service import SettingsService
from .user_service import UserService

__all__ = [
    "PersistenceGateway",
    "UserService",
    "ActivityLogService",
    "SettingsService",
    "FileService",
    "CommentService",
]
