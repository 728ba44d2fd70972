from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexdesk.db.base import Base, IDMixin, TimestampMixin
from lexdesk.models.enums import AccountType


class Client(IDMixin, TimestampMixin, Base):
    __tablename__ = "clients"

    company: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    account_type: Mapped[AccountType] = mapped_column(
        Enum(AccountType, name="account_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    cases: Mapped[List["Case"]] = relationship(secondary="case_clients", back_populates="clients")


class Person(IDMixin, TimestampMixin, Base):
    """Contacts, staff and task assignees attached to cases."""

    __tablename__ = "persons"

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
