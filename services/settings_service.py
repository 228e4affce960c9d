from typing import Dict, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import DatabaseManager
from models.setting import Setting
from schemas.base import utcnow


class SettingsService:
    # Seeded on startup, never overwriting an existing value
    DEFAULT_SETTINGS = {
        "siteName": "Admin WebApp",
        "maintenanceMode": "0",
        "allowRegistrations": "1",
    }

    TRUTHY_VALUES = ("1", "true", "yes", "on")

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def initialize_default_settings(self, db: AsyncSession = None) -> None:
        """Insert default settings whose key is not present yet"""
        async def _seed(session: AsyncSession) -> None:
            now = utcnow()
            try:
                await session.execute(
                    insert(Setting)
                    .values([
                        {"key": key, "value": value, "updated_at": now}
                        for key, value in self.DEFAULT_SETTINGS.items()
                    ])
                    .on_conflict_do_nothing(index_elements=[Setting.key])
                )
            except SQLAlchemyError as e:
                logger.error(f"Error seeding default settings: {e}")
                raise
            logger.debug("Default settings ensured: {}", ", ".join(self.DEFAULT_SETTINGS))

        if db:
            return await _seed(db)
        async with self.database.session_scope() as session:
            return await _seed(session)

    async def get_setting(self, key: str, db: AsyncSession = None) -> Optional[str]:
        """Setting value by key, None for an unknown key"""
        async def _get(session: AsyncSession) -> Optional[str]:
            result = await session.execute(select(Setting.value).where(Setting.key == key))
            return result.scalar_one_or_none()

        if db:
            return await _get(db)
        async with self.database.session_scope() as session:
            return await _get(session)

    async def get_bool_setting(self, key: str, default: bool = False, db: AsyncSession = None) -> bool:
        value = await self.get_setting(key, db=db)
        if value is None:
            return default
        return value.strip().lower() in self.TRUTHY_VALUES

    async def set_setting(self, key: str, value: Optional[str], db: AsyncSession = None) -> None:
        """Upsert on key, refreshing updated_at"""
        async def _set(session: AsyncSession) -> None:
            now = utcnow()
            statement = insert(Setting).values(key=key, value=value, updated_at=now)
            statement = statement.on_conflict_do_update(
                index_elements=[Setting.key],
                set_={"value": statement.excluded.value, "updated_at": statement.excluded.updated_at},
            )
            try:
                await session.execute(statement)
            except SQLAlchemyError as e:
                logger.error(f"Error setting {key}: {e}")
                raise

        if db:
            return await _set(db)
        async with self.database.session_scope() as session:
            return await _set(session)

    async def get_all_settings(self, db: AsyncSession = None) -> Dict[str, Optional[str]]:
        async def _get_all(session: AsyncSession) -> Dict[str, Optional[str]]:
            result = await session.execute(select(Setting.key, Setting.value))
            return {key: value for key, value in result.all()}

        if db:
            return await _get_all(db)
        async with self.database.session_scope() as session:
            return await _get_all(session)
