from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import Field

from lexdesk.models.enums import InvoiceStatus
from lexdesk.schemas.base import ORMModel


class ExpenseLine(ORMModel):
    description: str = Field(..., min_length=1, max_length=255)
    cost: Decimal = Field(..., ge=Decimal("0"), max_digits=12, decimal_places=2)
    quantity: int = Field(default=1, ge=0)
    billable: bool = True


class ExpenseRead(ExpenseLine):
    id: int
    order_index: int


class InvoiceCreate(ORMModel):
    case_id: int
    issue_date: Optional[date] = None
    expenses: List[ExpenseLine] = Field(default_factory=list)


class InvoiceUpdate(ORMModel):
    """Fields a caller may change on an existing invoice; anything else is ignored."""

    status: Optional[InvoiceStatus] = None
    notes: Optional[str] = None
    payment_terms: Optional[str] = Field(default=None, max_length=255)
    due_date: Optional[date] = None
    expenses: Optional[List[ExpenseLine]] = None


class InvoiceRead(ORMModel):
    id: int
    case_id: int
    case_name: Optional[str] = None
    case_number: Optional[str] = None
    owner_id: int
    owner_name: Optional[str] = None
    issue_date: date
    expenses: List[ExpenseRead]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    status: str
    notes: Optional[str] = None
    payment_terms: Optional[str] = None
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class StatusBucket(ORMModel):
    count: int = 0
    total: Decimal = Decimal("0.00")


class InvoiceStats(ORMModel):
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    by_status: Dict[str, StatusBucket]


class ActivityEntry(ORMModel):
    id: int
    action: str
    date: datetime
    amount: Decimal
    case_id: int
    owner_id: int
