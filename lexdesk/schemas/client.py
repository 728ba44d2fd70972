from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from lexdesk.models.enums import AccountType
from lexdesk.schemas.base import ORMModel


class ClientProfileRead(ORMModel):
    id: int
    company: str
    contact_person: str
    email: str
    account_type: AccountType
    created_at: datetime


class ClientProfileUpdate(ORMModel):
    company: Optional[str] = Field(default=None, min_length=1, max_length=255)
    contact_person: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    account_type: Optional[AccountType] = None
