from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from typing import Optional
import enum

from ..models import Priority, TaskStatus


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive client timestamps are taken to be UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SortField(str, enum.Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    TITLE = "title"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value):
        return _as_utc(value)


class TaskCreate(TaskBase):
    """Schema for creating new tasks."""
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks.

    Only fields that are supplied and not null are merged onto the task, so an
    optional field cannot be cleared through an update.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value):
        return _as_utc(value)

    def changes(self) -> dict:
        """Fields to merge onto the stored task."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class TaskFilter(BaseModel):
    """Filter and sort options for listing tasks. Filters are AND-combined."""
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    search: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_overdue: Optional[bool] = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class Task(TaskBase):
    """Complete task schema with all fields."""
    id: str
    status: TaskStatus
    priority: Priority
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaskResponse(Task):
    """Task response schema for API responses."""
    pass


class TaskStats(BaseModel):
    """Summary counts over the store's current contents."""
    total: int = 0
    completed: int = 0
    pending: int = 0
    in_progress: int = 0
    completion_rate: int = 0
