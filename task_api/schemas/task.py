from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from uuid import UUID

from ..models import as_utc


def _as_utc_or_none(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are kept as aware UTC. Naive values are taken to be UTC."""
    return as_utc(value) if value is not None else None


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(CamelModel):
    """Schema for creating new tasks.

    ``title`` is optional here so that a missing title is reported as a
    400 by the handler rather than a schema error.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    is_critical: Optional[bool] = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc_or_none(value)


class TaskUpdate(CamelModel):
    """Schema for partial updates. Only fields present in the body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    is_completed: Optional[bool] = None
    is_critical: Optional[bool] = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc_or_none(value)


class Task(CamelModel):
    """Complete task schema with all fields."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    public_id: UUID
    title: str
    description: Optional[str] = None
    priority: str
    due_date: Optional[datetime] = None
    is_completed: bool
    is_critical: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def timestamps_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands stored values back without an offset.
        return _as_utc_or_none(value)
