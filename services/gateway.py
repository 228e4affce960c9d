"""
Persistence gateway: the single entry point the web layer talks to.

Built by the composition root around an explicit ``DatabaseManager`` and passed
to whoever needs it. Every operation runs as its own transaction; grouping
several operations atomically is not provided unless the caller passes one
session through the ``db`` argument.
"""

from loguru import logger

from database import DatabaseManager

from .activity_log_service import ActivityLogService
from .comment_service import CommentService
from .file_service import FileService
from .settings_service import SettingsService
from .user_service import UserService


class PersistenceGateway:
    def __init__(self, database: DatabaseManager):
        self.database = database
        self.users = UserService(database)
        self.activity_logs = ActivityLogService(database)
        self.settings = SettingsService(database)
        self.files = FileService(database)
        self.comments = CommentService(database)

    async def initialize(self) -> None:
        """Create missing tables and seed default settings. Errors abort startup."""
        await self.database.initialize()
        await self.settings.initialize_default_settings()
        logger.info("Persistence gateway ready")

    async def close(self) -> None:
        await self.database.close()
