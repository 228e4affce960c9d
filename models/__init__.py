from .activity_log import ActivityLog
from .comment import Comment
from .file import File
from .setting import Setting
from .user import User

__all__ = ["User", "ActivityLog", "Setting", "File", "Comment"]
