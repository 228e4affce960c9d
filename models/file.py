from sqlalchemy import (BigInteger, CheckConstraint, Column, DateTime, ForeignKey,
                        Index, Integer, String, Text, func)
from sqlalchemy.orm import relationship

from schemas.base import Base, utcnow


class File(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    file_path = Column(Text, nullable=False)
    file_size = Column(BigInteger, nullable=False)
    mime_type = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime, default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    comments = relationship(
        "Comment",
        back_populates="file",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("file_size >= 0", name="check_file_size"),
        Index("ix_files_uploaded_by", "uploaded_by"),
        Index("ix_files_created_at", "created_at"),
    )
