from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from schemas.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(255), unique=True, nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    picture = Column(Text, nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    last_login = Column(DateTime, nullable=True)

    # No relationships back to files/comments/logs: deleting a user is a plain
    # DELETE and leaves those rows in place.
