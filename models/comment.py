from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import relationship

from schemas.base import Base, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    file_id = Column(Integer, ForeignKey("files.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime, default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    file = relationship("File", back_populates="comments")

    __table_args__ = (
        Index("ix_comments_file_id", "file_id"),
    )
