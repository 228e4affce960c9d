from typing import List

from loguru import logger
from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import ACTIVITY_LOG_LIMIT
from database import DatabaseManager
from models.activity_log import ActivityLog
from models.user import User
from schemas.activity import ActivityLogCreate, ActivityLogResponse


class ActivityLogService:
    def __init__(self, database: DatabaseManager):
        self.database = database

    @staticmethod
    def _joined_query():
        return (
            select(
                ActivityLog,
                User.name.label("user_name"),
                User.email.label("user_email"),
            )
            .outerjoin(User, ActivityLog.user_id == User.id)
            .order_by(desc(ActivityLog.created_at), desc(ActivityLog.id))
        )

    @staticmethod
    def _to_response(row) -> ActivityLogResponse:
        log, user_name, user_email = row
        return ActivityLogResponse.model_validate(log).model_copy(
            update={"user_name": user_name, "user_email": user_email}
        )

    async def create_activity_log(self, log_data: ActivityLogCreate, db: AsyncSession = None) -> int:
        """Append an audit record and return its id"""
        async def _create(session: AsyncSession) -> int:
            try:
                log = ActivityLog(
                    user_id=log_data.user_id,
                    action=log_data.action,
                    details=log_data.details,
                    ip_address=log_data.ip_address,
                )
                session.add(log)
                await session.flush()
                return log.id
            except SQLAlchemyError as e:
                logger.error(f"Error creating activity log '{log_data.action}': {e}")
                raise

        if db:
            return await _create(db)
        async with self.database.session_scope() as session:
            return await _create(session)

    async def get_activity_logs(self, limit: int = ACTIVITY_LOG_LIMIT, db: AsyncSession = None) -> List[ActivityLogResponse]:
        """Newest entries first, joined with the acting user's name and email"""
        async def _list(session: AsyncSession) -> List[ActivityLogResponse]:
            result = await session.execute(self._joined_query().limit(limit))
            return [self._to_response(row) for row in result.all()]

        if db:
            return await _list(db)
        async with self.database.session_scope() as session:
            return await _list(session)

    async def get_user_activity_logs(
        self, user_id: int, limit: int = ACTIVITY_LOG_LIMIT, db: AsyncSession = None
    ) -> List[ActivityLogResponse]:
        async def _list(session: AsyncSession) -> List[ActivityLogResponse]:
            result = await session.execute(
                self._joined_query().where(ActivityLog.user_id == user_id).limit(limit)
            )
            return [self._to_response(row) for row in result.all()]

        if db:
            return await _list(db)
        async with self.database.session_scope() as session:
            return await _list(session)
