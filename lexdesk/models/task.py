from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexdesk.db.base import Base, IDMixin, TimestampMixin
from lexdesk.models.enums import TaskPriority, TaskStatus


class Task(IDMixin, TimestampMixin, Base):
    __tablename__ = "tasks"
    __table_args__ = (CheckConstraint("progress >= 0 AND progress <= 100", name="progress_range"),)

    case_id: Mapped[int] = mapped_column("case", ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_to_id: Mapped[int] = mapped_column("assignedTo", ForeignKey("persons.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, name="task_status", values_callable=lambda e: [m.value for m in e]),
        default=TaskStatus.NOT_STARTED,
        nullable=False,
        index=True,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, name="task_priority", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    # Independent of status; nothing keeps the two in step.
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    due_date: Mapped[datetime] = mapped_column("dueDate", DateTime(timezone=True), nullable=False, index=True)

    case: Mapped["Case"] = relationship(back_populates="tasks")
    assignee: Mapped["Person"] = relationship()

    def overdue_as_of(self, now: Optional[datetime] = None) -> bool:
        if self.status == TaskStatus.COMPLETED:
            return False
        now = now or datetime.now(timezone.utc)
        due = self.due_date
        if due.tzinfo is None:
            due = due.replace(tzinfo=timezone.utc)
        return due < now
