from typing import List, Optional

from loguru import logger
from sqlalchemy import asc, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import DatabaseManager
from models.comment import Comment
from models.user import User
from schemas.base import utcnow
from schemas.comments import CommentCreate, CommentResponse, CommentUpdate


class CommentService:
    def __init__(self, database: DatabaseManager):
        self.database = database

    @staticmethod
    def _joined_query():
        return select(
            Comment,
            User.name.label("user_name"),
            User.email.label("user_email"),
            User.picture.label("user_picture"),
        ).outerjoin(User, Comment.user_id == User.id)

    @staticmethod
    def _to_response(row) -> CommentResponse:
        comment, user_name, user_email, user_picture = row
        return CommentResponse.model_validate(comment).model_copy(
            update={
                "user_name": user_name,
                "user_email": user_email,
                "user_picture": user_picture,
            }
        )

    async def _get_one(self, session: AsyncSession, comment_id: int) -> Optional[CommentResponse]:
        result = await session.execute(self._joined_query().where(Comment.id == comment_id))
        row = result.first()
        return self._to_response(row) if row else None

    async def create_comment(self, comment_data: CommentCreate, db: AsyncSession = None) -> CommentResponse:
        async def _create_comment(session: AsyncSession) -> CommentResponse:
            try:
                comment = Comment(
                    file_id=comment_data.file_id,
                    user_id=comment_data.user_id,
                    content=comment_data.content,
                )
                session.add(comment)
                await session.flush()
            except SQLAlchemyError as e:
                logger.error(f"Error creating comment on file {comment_data.file_id}: {e}")
                raise
            return await self._get_one(session, comment.id)

        if db:
            return await _create_comment(db)
        async with self.database.session_scope() as session:
            return await _create_comment(session)

    async def get_comment_by_id(self, comment_id: int, db: AsyncSession = None) -> Optional[CommentResponse]:
        if db:
            return await self._get_one(db, comment_id)
        async with self.database.session_scope() as session:
            return await self._get_one(session, comment_id)

    async def get_comments_by_file_id(self, file_id: int, db: AsyncSession = None) -> List[CommentResponse]:
        """Comments on one file, oldest first"""
        async def _list(session: AsyncSession) -> List[CommentResponse]:
            result = await session.execute(
                self._joined_query()
                .where(Comment.file_id == file_id)
                .order_by(asc(Comment.created_at), asc(Comment.id))
            )
            return [self._to_response(row) for row in result.all()]

        if db:
            return await _list(db)
        async with self.database.session_scope() as session:
            return await _list(session)

    async def update_comment(self, comment_id: int, content: str, db: AsyncSession = None) -> Optional[CommentResponse]:
        """Replace the text; empty or missing content raises ValidationError before any SQL"""
        comment_data = CommentUpdate(content=content)

        async def _update_comment(session: AsyncSession) -> Optional[CommentResponse]:
            try:
                await session.execute(
                    update(Comment)
                    .where(Comment.id == comment_id)
                    .values(content=comment_data.content, updated_at=utcnow())
                )
            except SQLAlchemyError as e:
                logger.error(f"Error updating comment {comment_id}: {e}")
                raise
            return await self._get_one(session, comment_id)

        if db:
            return await _update_comment(db)
        async with self.database.session_scope() as session:
            return await _update_comment(session)

    async def delete_comment(self, comment_id: int, db: AsyncSession = None) -> None:
        async def _delete_comment(session: AsyncSession) -> None:
            await session.execute(delete(Comment).where(Comment.id == comment_id))

        if db:
            return await _delete_comment(db)
        async with self.database.session_scope() as session:
            return await _delete_comment(session)
