from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import Field

from lexdesk.models.enums import CaseStatus
from lexdesk.schemas.base import ORMModel


class CaseBase(ORMModel):
    case_name: str = Field(..., min_length=1, max_length=255)
    case_number: Optional[str] = Field(default=None, max_length=100)
    practice_area: str = Field(..., min_length=1, max_length=120)
    case_stage: str = Field(..., min_length=1, max_length=120)
    date_opened: date
    office: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    statute_of_limitations: Optional[date] = None
    conflict_check: bool = False
    conflict_check_notes: Optional[str] = None
    custom_fields: Optional[Dict[str, str]] = None


class CaseCreate(CaseBase):
    client_ids: List[int] = Field(default_factory=list)
    contact_ids: List[int] = Field(default_factory=list)
    staff_ids: List[int] = Field(default_factory=list)


class CaseUpdate(ORMModel):
    """Mutable case fields; the owning lawyer is never reassigned here."""

    case_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    case_number: Optional[str] = Field(default=None, max_length=100)
    practice_area: Optional[str] = Field(default=None, min_length=1, max_length=120)
    case_stage: Optional[str] = Field(default=None, min_length=1, max_length=120)
    date_opened: Optional[date] = None
    office: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    statute_of_limitations: Optional[date] = None
    conflict_check: Optional[bool] = None
    conflict_check_notes: Optional[str] = None
    custom_fields: Optional[Dict[str, str]] = None
    status: Optional[CaseStatus] = None
    client_ids: Optional[List[int]] = None
    contact_ids: Optional[List[int]] = None
    staff_ids: Optional[List[int]] = None


class PersonSummary(ORMModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None


class ClientSummary(ORMModel):
    id: int
    company: str
    contact_person: str
    email: str


class LawyerSummary(ORMModel):
    id: int
    first_name: str
    last_name: str
    email: str


class CaseRead(CaseBase):
    id: int
    status: CaseStatus
    lawyer_id: int
    lawyer: Optional[LawyerSummary] = None
    clients: List[ClientSummary] = Field(default_factory=list)
    contacts: List[PersonSummary] = Field(default_factory=list)
    staff: List[PersonSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
