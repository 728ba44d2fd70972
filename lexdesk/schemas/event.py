from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Optional

from pydantic import Field

from lexdesk.models.enums import TaskPriority
from lexdesk.schemas.base import ORMModel
from lexdesk.schemas.case import PersonSummary


class EventBase(ORMModel):
    title: str = Field(..., min_length=1, max_length=255)
    event_type: str = Field(..., min_length=1, max_length=50)
    event_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    case_id: Optional[int] = None


class EventCreate(EventBase):
    attendee_ids: List[int] = Field(default_factory=list)


class EventUpdate(ORMModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    event_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    event_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    case_id: Optional[int] = None
    attendee_ids: Optional[List[int]] = None


class EventCaseSummary(ORMModel):
    id: int
    case_number: Optional[str] = None
    case_name: str


class EventRead(EventBase):
    id: int
    creator_id: int
    case: Optional[EventCaseSummary] = None
    attendees: List[PersonSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
