"""
Todo API - Task Models

Internal task model for database operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Optional
import uuid


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def encode_due_date(value: Optional[date]) -> Optional[datetime]:
    """BSON has no date type; store due dates as UTC midnight."""
    if value is None:
        return None
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def decode_due_date(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass
class Task:
    """Task entity for database storage."""

    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    completed: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> "Task":
        """Create a new, not yet completed task with generated ID."""
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            description=description,
            due_date=due_date,
            completed=False,
            created_at=now,
            updated_at=now,
        )

    def sort_key(self) -> tuple:
        """Due date ascending, undated tasks last, then creation order."""
        return (
            self.due_date is None,
            self.due_date or date.min,
            self.created_at,
            self.id,
        )

    def to_dict(self) -> dict:
        """Convert task to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "due_date": encode_due_date(self.due_date),
            "completed": self.completed,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create task from MongoDB document."""
        return cls(
            id=data["_id"],
            owner_id=data["owner_id"],
            title=data["title"],
            description=data.get("description"),
            due_date=decode_due_date(data.get("due_date")),
            completed=data.get("completed", False),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
