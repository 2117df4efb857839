"""
TASKCLI - Task Schema Definition
================================
Pydantic models for the command-line task tracker.
The whole store is one TaskBook document persisted as JSON.
"""

from enum import Enum
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    """Task lifecycle states"""
    PENDING = "pending"       # Added, not done yet
    COMPLETED = "completed"   # Marked done

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Task(BaseModel):
    """Individual task"""
    id: int = Field(ge=1)
    description: str
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must not be blank")
        return value

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskBook(BaseModel):
    """Complete task file - every task plus the id counter"""
    next_id: int = Field(ge=1, default=1)   # Never decremented, ids are not reused
    tasks: List[Task] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def status_summary(self) -> Dict[str, int]:
        summary = {status.value: 0 for status in TaskStatus}
        for task in self.tasks:
            summary[task.status.value] += 1
        return summary


def task_book_from_legacy(items: List[Dict[str, Any]]) -> TaskBook:
    """Build a TaskBook from the old bare-array layout.

    Old files hold ``[{"description": ..., "completed": bool}, ...]`` and
    address tasks by position, so ids are assigned 1..n in file order.
    """
    book = TaskBook()
    for i, item in enumerate(items):
        book.tasks.append(Task(
            id=i + 1,
            description=item["description"],
            status=TaskStatus.COMPLETED if item.get("completed") is True else TaskStatus.PENDING
        ))
    book.next_id = len(book.tasks) + 1
    return book
