from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import Boolean, Column, Date, Enum, ForeignKey, JSON, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexdesk.db.base import Base, IDMixin, TimestampMixin
from lexdesk.models.enums import CaseStatus


case_clients = Table(
    "case_clients",
    Base.metadata,
    Column("case_id", ForeignKey("cases.id", ondelete="CASCADE"), primary_key=True),
    Column("client_id", ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True),
)

case_contacts = Table(
    "case_contacts",
    Base.metadata,
    Column("case_id", ForeignKey("cases.id", ondelete="CASCADE"), primary_key=True),
    Column("person_id", ForeignKey("persons.id", ondelete="CASCADE"), primary_key=True),
)

case_staff = Table(
    "case_staff",
    Base.metadata,
    Column("case_id", ForeignKey("cases.id", ondelete="CASCADE"), primary_key=True),
    Column("person_id", ForeignKey("persons.id", ondelete="CASCADE"), primary_key=True),
)


class Case(IDMixin, TimestampMixin, Base):
    __tablename__ = "cases"

    case_name: Mapped[str] = mapped_column(String(255), nullable=False)
    case_number: Mapped[Optional[str]] = mapped_column(String(100), unique=True, nullable=True, index=True)
    practice_area: Mapped[str] = mapped_column(String(120), nullable=False)
    case_stage: Mapped[str] = mapped_column(String(120), nullable=False)
    date_opened: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    office: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    statute_of_limitations: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    conflict_check: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    conflict_check_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    custom_fields: Mapped[Optional[Dict[str, str]]] = mapped_column(JSON, nullable=True)

    status: Mapped[CaseStatus] = mapped_column(
        Enum(CaseStatus, name="case_status", values_callable=lambda e: [m.value for m in e]),
        default=CaseStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    lawyer_id: Mapped[int] = mapped_column("lawyer", ForeignKey("users.id"), nullable=False, index=True)

    lawyer: Mapped["User"] = relationship(back_populates="cases")
    clients: Mapped[List["Client"]] = relationship(secondary=case_clients, back_populates="cases")
    contacts: Mapped[List["Person"]] = relationship(secondary=case_contacts)
    staff: Mapped[List["Person"]] = relationship(secondary=case_staff)
    tasks: Mapped[List["Task"]] = relationship(back_populates="case", cascade="all, delete-orphan")
