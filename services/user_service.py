from typing import List, Optional

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import DatabaseManager
from models.user import User
from schemas.base import utcnow
from schemas.users import UserCreate, UserResponse, UserSummary, UserUpdate, normalize_email


class UserService:
    def __init__(self, database: DatabaseManager):
        self.database = database

    async def _get_one(self, session: AsyncSession, *criteria) -> Optional[UserResponse]:
        result = await session.execute(select(User).where(*criteria))
        user = result.scalar_one_or_none()
        return UserResponse.model_validate(user) if user else None

    async def get_user_by_id(self, user_id: int, db: AsyncSession = None) -> Optional[UserResponse]:
        """Get user by ID, None when no row matches"""
        if db:
            return await self._get_one(db, User.id == user_id)
        async with self.database.session_scope() as session:
            return await self._get_one(session, User.id == user_id)

    async def get_user_by_external_id(self, external_id: str, db: AsyncSession = None) -> Optional[UserResponse]:
        """Get user by identity provider id"""
        if db:
            return await self._get_one(db, User.external_id == external_id)
        async with self.database.session_scope() as session:
            return await self._get_one(session, User.external_id == external_id)

    async def get_user_by_email(self, email: str, db: AsyncSession = None) -> Optional[UserResponse]:
        """Lookup by email, normalized the way create_user stores it"""
        normalized = normalize_email(email)
        if normalized is None:
            return None
        if db:
            return await self._get_one(db, User.email == normalized)
        async with self.database.session_scope() as session:
            return await self._get_one(session, User.email == normalized)

    async def create_user(self, user_data: UserCreate, db: AsyncSession = None) -> UserResponse:
        """Create a new user and return the row as stored.

        Duplicate email or external id raises ``IntegrityError``.
        """
        async def _create_user(session: AsyncSession) -> UserResponse:
            try:
                user = User(
                    external_id=user_data.external_id,
                    email=user_data.email,
                    name=user_data.name,
                    picture=user_data.picture,
                    is_admin=bool(user_data.is_admin),
                    last_login=utcnow(),
                )
                session.add(user)
                await session.flush()
                await session.refresh(user)
            except SQLAlchemyError as e:
                logger.error(f"Error creating user {user_data.email}: {e}")
                raise

            logger.info("Created user {} ({})", user.id, user.email)
            return UserResponse.model_validate(user)

        if db:
            return await _create_user(db)
        async with self.database.session_scope() as session:
            return await _create_user(session)

    async def update_user(self, user_id: int, user_data: UserUpdate, db: AsyncSession = None) -> Optional[UserResponse]:
        """Apply the fields set on ``user_data``; None if the user does not exist"""
        async def _update_user(session: AsyncSession) -> Optional[UserResponse]:
            update_data = user_data.changes()
            if update_data:
                try:
                    await session.execute(
                        update(User)
                        .where(User.id == user_id)
                        .values(**update_data)
                    )
                except SQLAlchemyError as e:
                    logger.error(f"Error updating user {user_id}: {e}")
                    raise

            return await self._get_one(session, User.id == user_id)

        if db:
            return await _update_user(db)
        async with self.database.session_scope() as session:
            return await _update_user(session)

    async def record_login(self, user_id: int, db: AsyncSession = None) -> Optional[UserResponse]:
        """Stamp last_login with the current time"""
        return await self.update_user(user_id, UserUpdate(last_login=utcnow()), db=db)

    async def get_all_users(self, db: AsyncSession = None) -> List[UserSummary]:
        """List users newest first, without the external identity column"""
        async def _list_users(session: AsyncSession) -> List[UserSummary]:
            result = await session.execute(
                select(
                    User.id,
                    User.email,
                    User.name,
                    User.picture,
                    User.is_admin,
                    User.is_active,
                    User.created_at,
                    User.last_login,
                ).order_by(User.created_at.desc(), User.id.desc())
            )
            return [UserSummary.model_validate(row) for row in result.all()]

        if db:
            return await _list_users(db)
        async with self.database.session_scope() as session:
            return await _list_users(session)

    async def delete_user(self, user_id: int, db: AsyncSession = None) -> None:
        """Delete user. Files, comments and activity logs are left in place."""
        async def _delete_user(session: AsyncSession) -> None:
            result = await session.execute(delete(User).where(User.id == user_id))
            if result.rowcount:
                logger.info("Deleted user {}", user_id)

        if db:
            return await _delete_user(db)
        async with self.database.session_scope() as session:
            return await _delete_user(session)
