from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexdesk.db.base import Base, IDMixin, TimestampMixin
from lexdesk.models.enums import InvoiceStatus


class Invoice(IDMixin, TimestampMixin, Base):
    __tablename__ = "invoices"

    # Column names follow the records migrated from the document store.
    case_id: Mapped[int] = mapped_column("case", ForeignKey("cases.id"), nullable=False, index=True)
    owner_id: Mapped[int] = mapped_column("user", ForeignKey("users.id"), nullable=False, index=True)
    issue_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)

    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)

    # Plain string: legacy records may carry statuses outside InvoiceStatus.
    status: Mapped[str] = mapped_column(String(32), default=InvoiceStatus.DRAFT.value, nullable=False, index=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_terms: Mapped[Optional[str]] = mapped_column("paymentTerms", String(255), nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column("dueDate", Date, nullable=True)

    case: Mapped["Case"] = relationship()
    owner: Mapped["User"] = relationship(back_populates="invoices_issued")
    expenses: Mapped[List["InvoiceExpense"]] = relationship(
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by=lambda: InvoiceExpense.order_index.asc(),
    )

    @property
    def case_name(self) -> Optional[str]:
        return self.case.case_name if self.case else None

    @property
    def case_number(self) -> Optional[str]:
        return self.case.case_number if self.case else None

    @property
    def owner_name(self) -> Optional[str]:
        return self.owner.full_name if self.owner else None


class InvoiceExpense(IDMixin, Base):
    __tablename__ = "invoice_expenses"

    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    billable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    invoice: Mapped["Invoice"] = relationship(back_populates="expenses")
