"""Role-scoped visibility rules for cases and invoices.

Callers are a closed set of identities. Each resolver maps an identity to
an SQL predicate; any identity outside the set is rejected outright.

Two rules are deliberately literal:

* lawyers see the invoices they issued, not every invoice on cases they
  own;
* clients have no invoice visibility at all, only their open cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sqlalchemy import ColumnElement, and_

from lexdesk.core.errors import Unauthorized
from lexdesk.models.case import Case
from lexdesk.models.client import Client
from lexdesk.models.enums import CaseStatus, IdentityRole
from lexdesk.models.invoice import Invoice


@dataclass(frozen=True)
class LawyerIdentity:
    id: int

    @property
    def role(self) -> IdentityRole:
        return IdentityRole.LAWYER


@dataclass(frozen=True)
class ClientIdentity:
    id: int

    @property
    def role(self) -> IdentityRole:
        return IdentityRole.CLIENT


Identity = Union[LawyerIdentity, ClientIdentity]


def identity_from_claims(role: object, subject: int) -> Identity:
    if role == IdentityRole.LAWYER:
        return LawyerIdentity(id=subject)
    if role == IdentityRole.CLIENT:
        return ClientIdentity(id=subject)
    raise Unauthorized("Unrecognised role")


def resolve_case_filter(identity: Identity) -> ColumnElement[bool]:
    if isinstance(identity, LawyerIdentity):
        return Case.lawyer_id == identity.id
    if isinstance(identity, ClientIdentity):
        return and_(
            Case.clients.any(Client.id == identity.id),
            Case.status != CaseStatus.CLOSED,
        )
    raise Unauthorized()


def resolve_invoice_filter(identity: Identity) -> ColumnElement[bool]:
    if isinstance(identity, LawyerIdentity):
        return Invoice.owner_id == identity.id
    if isinstance(identity, ClientIdentity):
        raise Unauthorized("Clients cannot view invoices")
    raise Unauthorized()


def require_lawyer(identity: Identity) -> LawyerIdentity:
    if isinstance(identity, LawyerIdentity):
        return identity
    raise Unauthorized("Only lawyers can perform this action")


def require_client(identity: Identity) -> ClientIdentity:
    if isinstance(identity, ClientIdentity):
        return identity
    raise Unauthorized("Only clients can perform this action")
