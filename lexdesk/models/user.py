from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexdesk.db.base import Base, IDMixin, TimestampMixin


class User(IDMixin, TimestampMixin, Base):
    """A lawyer account. Credentials live with the identity provider."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    firm_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    cases: Mapped[List["Case"]] = relationship(back_populates="lawyer")
    invoices_issued: Mapped[List["Invoice"]] = relationship(back_populates="owner")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
