from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from lexdesk.core.access import LawyerIdentity, resolve_case_filter
from lexdesk.core.errors import InvalidReference, NotFound, ValidationFailure
from lexdesk.models.case import Case
from lexdesk.models.client import Person
from lexdesk.models.event import Event
from lexdesk.schemas.event import EventCreate, EventUpdate
from lexdesk.services.cases import resolve_members


logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = frozenset({"title", "event_type", "event_date"})


def _event_query(lawyer: LawyerIdentity):
    return (
        select(Event)
        .options(selectinload(Event.case), selectinload(Event.attendees))
        .where(Event.creator_id == lawyer.id)
        .execution_options(populate_existing=True)
    )


def _check_case(db: Session, case_id: Optional[int], lawyer: LawyerIdentity) -> None:
    if case_id is None:
        return
    owned = db.scalars(select(Case.id).where(Case.id == case_id, resolve_case_filter(lawyer))).first()
    if owned is None:
        raise InvalidReference("Case", case_id)


def _check_times(event: Event) -> None:
    if event.start_time and event.end_time and event.end_time < event.start_time:
        raise ValidationFailure("Event cannot end before it starts")


def list_events(db: Session, lawyer: LawyerIdentity) -> Sequence[Event]:
    stmt = _event_query(lawyer).order_by(Event.event_date.asc(), Event.start_time.asc(), Event.id.asc())
    return db.scalars(stmt).all()


def get_event_for(db: Session, event_id: int, lawyer: LawyerIdentity) -> Event:
    event = db.scalars(_event_query(lawyer).where(Event.id == event_id)).first()
    if event is None:
        raise NotFound("Event", event_id)
    return event


def create_event(db: Session, event_in: EventCreate, lawyer: LawyerIdentity, *, now: datetime) -> Event:
    _check_case(db, event_in.case_id, lawyer)
    attendees = resolve_members(db, Person, event_in.attendee_ids, "Person")

    event = Event(
        **event_in.model_dump(exclude={"attendee_ids"}),
        creator_id=lawyer.id,
        attendees=attendees,
        created_at=now,
        updated_at=now,
    )
    _check_times(event)
    db.add(event)
    db.commit()
    logger.info("event_created", extra={"case_id": event.case_id, "user_id": lawyer.id})
    return event


def update_event(db: Session, event: Event, event_update: EventUpdate, lawyer: LawyerIdentity, *, now: datetime) -> Event:
    changes = event_update.model_dump(exclude_unset=True)
    attendee_ids = changes.pop("attendee_ids", None)

    cleared = sorted(field for field, value in changes.items() if value is None and field in _REQUIRED_FIELDS)
    if cleared:
        raise ValidationFailure(f"{cleared[0]} cannot be cleared")
    if "case_id" in changes:
        _check_case(db, changes["case_id"], lawyer)
    attendees = resolve_members(db, Person, attendee_ids, "Person") if attendee_ids is not None else None

    start = changes.get("start_time", event.start_time)
    end = changes.get("end_time", event.end_time)
    if start and end and end < start:
        raise ValidationFailure("Event cannot end before it starts")

    for field, value in changes.items():
        setattr(event, field, value)
    if attendees is not None:
        event.attendees = attendees
    event.updated_at = now
    db.commit()
    db.refresh(event)
    logger.info("event_updated", extra={"case_id": event.case_id, "fields": sorted(event_update.model_fields_set)})
    return event


def delete_event(db: Session, event: Event) -> None:
    db.delete(event)
    db.commit()
    logger.info("event_deleted", extra={"case_id": event.case_id})
