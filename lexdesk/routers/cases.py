from __future__ import annotations

from datetime import datetime
from typing import Callable, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lexdesk.core.access import Identity, require_lawyer
from lexdesk.core.deps import get_clock, get_current_identity
from lexdesk.db.session import get_db
from lexdesk.schemas.case import CaseCreate, CaseRead, CaseUpdate
from lexdesk.services import cases as case_service

router = APIRouter(prefix="/api/cases", tags=["cases"])


@router.post("", response_model=CaseRead, status_code=status.HTTP_201_CREATED)
def create_case(
    case_in: CaseCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CaseRead:
    lawyer = require_lawyer(identity)
    case = case_service.create_case(db, case_in, lawyer, now=clock())
    return CaseRead.model_validate(case_service.get_case_for(db, case.id, lawyer))


@router.get("", response_model=List[CaseRead])
def list_cases(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> List[CaseRead]:
    return [CaseRead.model_validate(c) for c in case_service.list_cases(db, identity)]


@router.get("/{case_id}", response_model=CaseRead)
def get_case(
    case_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> CaseRead:
    return CaseRead.model_validate(case_service.get_case_for(db, case_id, identity))


@router.api_route("/{case_id}", methods=["PATCH", "PUT"], response_model=CaseRead)
def update_case(
    case_id: int,
    case_update: CaseUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CaseRead:
    lawyer = require_lawyer(identity)
    case = case_service.get_case_for(db, case_id, lawyer)
    case = case_service.update_case(db, case, case_update, now=clock())
    return CaseRead.model_validate(case)


@router.delete("/{case_id}", response_model=dict)
def delete_case(
    case_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> dict:
    lawyer = require_lawyer(identity)
    case = case_service.get_case_for(db, case_id, lawyer)
    case_service.delete_case(db, case)
    return {"message": "Case deleted"}
