"""Import all models so SQLAlchemy metadata is fully registered."""

from lexdesk.db.base import Base

from lexdesk.models.case import Case, case_clients, case_contacts, case_staff
from lexdesk.models.client import Client, Person
from lexdesk.models.event import Event, event_attendees
from lexdesk.models.enums import (
    AccountType,
    CaseStatus,
    IdentityRole,
    InvoiceStatus,
    TaskPriority,
    TaskStatus,
)
from lexdesk.models.invoice import Invoice, InvoiceExpense
from lexdesk.models.task import Task
from lexdesk.models.user import User

__all__ = [
    "Base",
    "AccountType",
    "Case",
    "CaseStatus",
    "Client",
    "Event",
    "IdentityRole",
    "Invoice",
    "InvoiceExpense",
    "InvoiceStatus",
    "Person",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
    "case_clients",
    "case_contacts",
    "case_staff",
    "event_attendees",
]
