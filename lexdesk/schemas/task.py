from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from lexdesk.models.enums import TaskPriority, TaskStatus
from lexdesk.schemas.base import ORMModel


class TaskBase(ORMModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: TaskPriority
    progress: int = Field(default=0, ge=0, le=100)
    due_date: datetime
    assigned_to_id: int


class TaskCreate(TaskBase):
    pass


class TaskUpdate(ORMModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    due_date: Optional[datetime] = None
    assigned_to_id: Optional[int] = None


class TaskRead(TaskBase):
    id: int
    case_id: int
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime
