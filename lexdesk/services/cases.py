from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Sequence, Type, TypeVar

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from lexdesk.core.access import ClientIdentity, Identity, LawyerIdentity, resolve_case_filter
from lexdesk.core.errors import DuplicateKey, InvalidReference, NotFound, ValidationFailure
from lexdesk.db.base import Base
from lexdesk.models.case import Case
from lexdesk.models.client import Client, Person
from lexdesk.models.event import Event
from lexdesk.models.invoice import Invoice
from lexdesk.schemas.case import CaseCreate, CaseUpdate


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_MEMBER_FIELDS = {
    "client_ids": ("clients", Client, "Client"),
    "contact_ids": ("contacts", Person, "Person"),
    "staff_ids": ("staff", Person, "Person"),
}
_REQUIRED_FIELDS = frozenset({"case_name", "practice_area", "case_stage", "date_opened", "office", "status", "conflict_check"})


def _case_query():
    return select(Case).options(
        selectinload(Case.lawyer),
        selectinload(Case.clients),
        selectinload(Case.contacts),
        selectinload(Case.staff),
    )


def resolve_members(db: Session, model: Type[ModelT], ids: Iterable[int], resource: str) -> List[ModelT]:
    wanted = list(dict.fromkeys(ids))
    if not wanted:
        return []
    found = {row.id: row for row in db.scalars(select(model).where(model.id.in_(wanted)))}
    missing = [pk for pk in wanted if pk not in found]
    if missing:
        raise InvalidReference(resource, missing[0])
    return [found[pk] for pk in wanted]


def _commit(db: Session, case: Case) -> Case:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateKey("Case number must be unique") from exc
    return case


def list_cases(db: Session, identity: Identity) -> Sequence[Case]:
    stmt = _case_query().where(resolve_case_filter(identity))
    if isinstance(identity, ClientIdentity):
        stmt = stmt.order_by(Case.date_opened.desc(), Case.id.desc())
    else:
        stmt = stmt.order_by(Case.created_at.desc(), Case.id.desc())
    return db.scalars(stmt).all()


def get_case_for(db: Session, case_id: int, identity: Identity) -> Case:
    case = db.scalars(_case_query().where(Case.id == case_id, resolve_case_filter(identity))).first()
    if case is None:
        raise NotFound("Case", case_id)
    return case


def create_case(db: Session, case_in: CaseCreate, lawyer: LawyerIdentity, *, now: datetime) -> Case:
    data = case_in.model_dump(exclude=set(_MEMBER_FIELDS))
    case = Case(**data, lawyer_id=lawyer.id, created_at=now, updated_at=now)
    for field, (attr, model, resource) in _MEMBER_FIELDS.items():
        setattr(case, attr, resolve_members(db, model, getattr(case_in, field), resource))
    db.add(case)
    _commit(db, case)
    logger.info("case_created", extra={"case_id": case.id, "user_id": lawyer.id})
    return case


def update_case(db: Session, case: Case, case_update: CaseUpdate, *, now: datetime) -> Case:
    changes = case_update.model_dump(exclude_unset=True)
    members = {field: changes.pop(field) for field in list(changes) if field in _MEMBER_FIELDS}

    cleared = sorted(field for field, value in changes.items() if value is None and field in _REQUIRED_FIELDS)
    if cleared:
        raise ValidationFailure(f"{cleared[0]} cannot be cleared")

    resolved = {}
    for field, ids in members.items():
        if ids is None:
            continue
        attr, model, resource = _MEMBER_FIELDS[field]
        resolved[attr] = resolve_members(db, model, ids, resource)

    for field, value in changes.items():
        setattr(case, field, value)
    for attr, rows in resolved.items():
        setattr(case, attr, rows)

    case.updated_at = now
    _commit(db, case)
    logger.info("case_updated", extra={"case_id": case.id, "fields": sorted(case_update.model_fields_set)})
    return case


def delete_case(db: Session, case: Case) -> None:
    if db.scalar(select(exists().where(Invoice.case_id == case.id))):
        raise ValidationFailure("Case has invoices; delete them before removing the case")
    db.execute(update(Event).where(Event.case_id == case.id).values(case_id=None))
    db.delete(case)
    db.commit()
    logger.info("case_deleted", extra={"case_id": case.id})
