from sqlalchemy import Column, DateTime, Integer, String, Text, func

from schemas.base import Base, utcnow


class Setting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(Text, nullable=True)
    updated_at = Column(
        DateTime, default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )
