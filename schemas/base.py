from datetime import datetime, timezone
from typing import ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite DateTime columns store it as sortable ISO text."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RecordResponse(BaseModel):
    """Base for records read back from the store"""

    model_config = ConfigDict(from_attributes=True)


class PatchModel(BaseModel):
    """Base for partial updates: unknown field names are rejected up front"""

    model_config = ConfigDict(extra="forbid")

    # Columns that are NOT NULL in the table: an explicit None is rejected here
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_for_required_columns(self):
        nulled = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
