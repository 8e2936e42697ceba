from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4
import enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Priority(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Ordering rank used when listing by priority: high first, low last.
PRIORITY_RANK = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Task(SQLModel, table=True):
    """Task record with a derived priority label.

    ``priority`` is stored as plain text and rewritten on every create and
    update from ``is_completed``, ``is_critical`` and ``due_date``.
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: UUID = Field(default_factory=uuid4, unique=True, index=True, nullable=False)
    title: str = Field(nullable=False)
    description: Optional[str] = None
    priority: str = Field(default=Priority.MEDIUM.value, index=True, nullable=False)
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    is_completed: bool = Field(default=False)
    is_critical: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
