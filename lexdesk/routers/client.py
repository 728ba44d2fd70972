from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lexdesk.core.access import Identity, require_client
from lexdesk.core.deps import get_clock, get_current_identity
from lexdesk.core.errors import DuplicateKey, NotFound, ValidationFailure
from lexdesk.db.session import get_db
from lexdesk.models.client import Client
from lexdesk.schemas.client import ClientProfileRead, ClientProfileUpdate

router = APIRouter(prefix="/api/client", tags=["client"])
logger = logging.getLogger(__name__)


def _get_profile(db: Session, identity: Identity) -> Client:
    client_identity = require_client(identity)
    client = db.get(Client, client_identity.id)
    if client is None:
        raise NotFound("Client", client_identity.id)
    return client


@router.get("/profile", response_model=ClientProfileRead)
def read_profile(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ClientProfileRead:
    return ClientProfileRead.model_validate(_get_profile(db, identity))


@router.put("/profile", response_model=ClientProfileRead)
def update_profile(
    profile_update: ClientProfileUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ClientProfileRead:
    client = _get_profile(db, identity)
    changes = profile_update.model_dump(exclude_unset=True)
    cleared = sorted(field for field, value in changes.items() if value is None)
    if cleared:
        raise ValidationFailure(f"{cleared[0]} cannot be cleared")

    for field, value in changes.items():
        setattr(client, field, value)
    client.updated_at = clock()

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateKey("Email already registered") from exc

    logger.info("client_profile_updated", extra={"user_id": client.id, "fields": sorted(changes)})
    return ClientProfileRead.model_validate(client)
