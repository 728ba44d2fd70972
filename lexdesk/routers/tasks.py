from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from lexdesk.core.access import Identity, LawyerIdentity, require_lawyer
from lexdesk.core.deps import get_clock, get_current_identity
from lexdesk.core.errors import InvalidReference, NotFound, ValidationFailure
from lexdesk.db.session import get_db
from lexdesk.models.case import Case
from lexdesk.models.client import Person
from lexdesk.models.task import Task
from lexdesk.schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(tags=["tasks"])
logger = logging.getLogger(__name__)


def _task_read(task: Task, now: datetime) -> TaskRead:
    return TaskRead.model_validate(task).model_copy(update={"is_overdue": task.overdue_as_of(now)})


def _get_case_or_404(db: Session, case_id: int, lawyer: LawyerIdentity) -> Case:
    case = db.get(Case, case_id)
    if case is None or case.lawyer_id != lawyer.id:
        raise NotFound("Case", case_id)
    return case


def _get_task_or_404(db: Session, task_id: int, lawyer: LawyerIdentity) -> Task:
    task = db.scalars(
        select(Task).join(Task.case).where(Task.id == task_id, Case.lawyer_id == lawyer.id)
    ).first()
    if task is None:
        raise NotFound("Task", task_id)
    return task


def _ensure_assignee(db: Session, person_id: int) -> None:
    if db.get(Person, person_id) is None:
        raise InvalidReference("Person", person_id)


@router.get("/api/cases/{case_id}/tasks", response_model=List[TaskRead])
def list_tasks(
    case_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> List[TaskRead]:
    case = _get_case_or_404(db, case_id, require_lawyer(identity))
    now = clock()
    tasks = db.scalars(select(Task).where(Task.case_id == case.id).order_by(Task.due_date.asc(), Task.id.asc()))
    return [_task_read(t, now) for t in tasks]


@router.post("/api/cases/{case_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    case_id: int,
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TaskRead:
    lawyer = require_lawyer(identity)
    case = _get_case_or_404(db, case_id, lawyer)
    _ensure_assignee(db, task_in.assigned_to_id)

    now = clock()
    task = Task(case_id=case.id, created_at=now, updated_at=now, **task_in.model_dump())
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("task_created", extra={"case_id": case.id, "user_id": lawyer.id})
    return _task_read(task, now)


@router.get("/api/tasks/{task_id}", response_model=TaskRead)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TaskRead:
    task = _get_task_or_404(db, task_id, require_lawyer(identity))
    return _task_read(task, clock())


@router.api_route("/api/tasks/{task_id}", methods=["PATCH", "PUT"], response_model=TaskRead)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TaskRead:
    task = _get_task_or_404(db, task_id, require_lawyer(identity))
    changes = task_update.model_dump(exclude_unset=True)
    cleared = sorted(field for field, value in changes.items() if value is None)
    if cleared:
        raise ValidationFailure(f"{cleared[0]} cannot be cleared")
    if "assigned_to_id" in changes:
        _ensure_assignee(db, changes["assigned_to_id"])

    for field, value in changes.items():
        setattr(task, field, value)
    now = clock()
    task.updated_at = now
    db.commit()
    db.refresh(task)
    logger.info("task_updated", extra={"case_id": task.case_id, "fields": sorted(changes)})
    return _task_read(task, now)


@router.delete("/api/tasks/{task_id}", response_model=dict)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> dict:
    task = _get_task_or_404(db, task_id, require_lawyer(identity))
    case_id = task.case_id
    db.delete(task)
    db.commit()
    logger.info("task_deleted", extra={"case_id": case_id})
    return {"message": "Task deleted"}
