from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func

from schemas.base import Base, utcnow


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    action = Column(String(100), nullable=False)
    details = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_activity_logs_created_at", "created_at"),
    )
