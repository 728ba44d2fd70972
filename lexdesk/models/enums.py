from __future__ import annotations

from enum import StrEnum


class IdentityRole(StrEnum):
    LAWYER = "lawyer"
    CLIENT = "client"


class CaseStatus(StrEnum):
    ACTIVE = "active"
    CLOSED = "closed"
    PENDING = "pending"


class InvoiceStatus(StrEnum):
    DRAFT = "Draft"
    OUTSTANDING = "Outstanding"
    PAID = "Paid"


class TaskStatus(StrEnum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    PENDING = "Pending"


class TaskPriority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AccountType(StrEnum):
    INDIVIDUAL = "Individual"
    BUSINESS = "Business"
    CORPORATE = "Corporate"
