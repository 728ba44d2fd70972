from __future__ import annotations

from datetime import date, time
from typing import List, Optional

from sqlalchemy import Column, Date, Enum, ForeignKey, String, Table, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexdesk.db.base import Base, IDMixin, TimestampMixin
from lexdesk.models.enums import TaskPriority


event_attendees = Table(
    "event_attendees",
    Base.metadata,
    Column("event_id", ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("person_id", ForeignKey("persons.id", ondelete="CASCADE"), primary_key=True),
)


class Event(IDMixin, TimestampMixin, Base):
    """A calendar entry: hearing, meeting or deadline, optionally tied to a case."""

    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    event_type: Mapped[str] = mapped_column("type", String(50), nullable=False)
    event_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    start_time: Mapped[Optional[time]] = mapped_column("startTime", Time, nullable=True)
    end_time: Mapped[Optional[time]] = mapped_column("endTime", Time, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    priority: Mapped[Optional[TaskPriority]] = mapped_column(
        Enum(TaskPriority, name="task_priority", values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    # Deleting a case keeps its calendar history.
    case_id: Mapped[Optional[int]] = mapped_column(
        "caseId", ForeignKey("cases.id", ondelete="SET NULL"), nullable=True, index=True
    )
    creator_id: Mapped[int] = mapped_column("creator", ForeignKey("users.id"), nullable=False, index=True)

    case: Mapped[Optional["Case"]] = relationship()
    creator: Mapped["User"] = relationship()
    attendees: Mapped[List["Person"]] = relationship(secondary=event_attendees)
