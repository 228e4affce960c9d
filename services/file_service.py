from typing import List, Optional

from loguru import logger
from sqlalchemy import desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import DatabaseManager
from models.file import File
from models.user import User
from schemas.base import utcnow
from schemas.files import FileCreate, FileResponse, FileUpdate


class FileService:
    """File metadata records, always read back joined with the uploader"""

    def __init__(self, database: DatabaseManager):
        self.database = database

    @staticmethod
    def _joined_query():
        # Left join: a file outlives its uploader
        return select(
            File,
            User.name.label("uploader_name"),
            User.email.label("uploader_email"),
        ).outerjoin(User, File.uploaded_by == User.id)

    @staticmethod
    def _to_response(row) -> FileResponse:
        file, uploader_name, uploader_email = row
        return FileResponse.model_validate(file).model_copy(
            update={"uploader_name": uploader_name, "uploader_email": uploader_email}
        )

    async def _get_one(self, session: AsyncSession, file_id: int) -> Optional[FileResponse]:
        result = await session.execute(self._joined_query().where(File.id == file_id))
        row = result.first()
        return self._to_response(row) if row else None

    async def create_file(self, file_data: FileCreate, db: AsyncSession = None) -> FileResponse:
        """Record metadata for a stored upload"""
        async def _create_file(session: AsyncSession) -> FileResponse:
            try:
                file = File(**file_data.model_dump())
                session.add(file)
                await session.flush()
            except SQLAlchemyError as e:
                logger.error(f"Error creating file record {file_data.original_name}: {e}")
                raise

            logger.info("Created file {} for user {}", file.id, file.uploaded_by)
            return await self._get_one(session, file.id)

        if db:
            return await _create_file(db)
        async with self.database.session_scope() as session:
            return await _create_file(session)

    async def get_file_by_id(self, file_id: int, db: AsyncSession = None) -> Optional[FileResponse]:
        if db:
            return await self._get_one(db, file_id)
        async with self.database.session_scope() as session:
            return await self._get_one(session, file_id)

    async def get_all_files(self, db: AsyncSession = None) -> List[FileResponse]:
        """All files, newest first"""
        async def _list_files(session: AsyncSession) -> List[FileResponse]:
            result = await session.execute(
                self._joined_query().order_by(desc(File.created_at), desc(File.id))
            )
            return [self._to_response(row) for row in result.all()]

        if db:
            return await _list_files(db)
        async with self.database.session_scope() as session:
            return await _list_files(session)

    async def update_file(self, file_id: int, file_data: FileUpdate, db: AsyncSession = None) -> Optional[FileResponse]:
        """Apply the fields set on ``file_data``. updated_at is refreshed even for an empty patch."""
        async def _update_file(session: AsyncSession) -> Optional[FileResponse]:
            update_data = file_data.changes()
            update_data["updated_at"] = utcnow()
            try:
                await session.execute(
                    update(File)
                    .where(File.id == file_id)
                    .values(**update_data)
                )
            except SQLAlchemyError as e:
                logger.error(f"Error updating file {file_id}: {e}")
                raise

            return await self._get_one(session, file_id)

        if db:
            return await _update_file(db)
        async with self.database.session_scope() as session:
            return await _update_file(session)

    async def delete_file(self, file_id: int, db: AsyncSession = None) -> None:
        """Delete a file record together with its comments"""
        async def _delete_file(session: AsyncSession) -> None:
            file = await session.get(File, file_id)
            if not file:
                return
            # the comments relationship cascades the delete
            await session.delete(file)
            await session.flush()
            logger.info("Deleted file {}", file_id)

        if db:
            return await _delete_file(db)
        async with self.database.session_scope() as session:
            return await _delete_file(session)
