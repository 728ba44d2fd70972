from __future__ import annotations

from datetime import datetime
from typing import Callable, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lexdesk.core.access import Identity, require_lawyer
from lexdesk.core.deps import get_clock, get_current_identity
from lexdesk.db.session import get_db
from lexdesk.schemas.event import EventCreate, EventRead, EventUpdate
from lexdesk.services import events as event_service

router = APIRouter(prefix="/api/events", tags=["events"])


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> EventRead:
    lawyer = require_lawyer(identity)
    event = event_service.create_event(db, event_in, lawyer, now=clock())
    return EventRead.model_validate(event_service.get_event_for(db, event.id, lawyer))


@router.get("", response_model=List[EventRead])
def list_events(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> List[EventRead]:
    return [EventRead.model_validate(e) for e in event_service.list_events(db, require_lawyer(identity))]


@router.get("/{event_id}", response_model=EventRead)
def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> EventRead:
    return EventRead.model_validate(event_service.get_event_for(db, event_id, require_lawyer(identity)))


@router.api_route("/{event_id}", methods=["PATCH", "PUT"], response_model=EventRead)
def update_event(
    event_id: int,
    event_update: EventUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> EventRead:
    lawyer = require_lawyer(identity)
    event = event_service.get_event_for(db, event_id, lawyer)
    event = event_service.update_event(db, event, event_update, lawyer, now=clock())
    return EventRead.model_validate(event)


@router.delete("/{event_id}", response_model=dict)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> dict:
    event = event_service.get_event_for(db, event_id, require_lawyer(identity))
    event_service.delete_event(db, event)
    return {"message": "Event deleted"}
