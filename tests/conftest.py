from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lexdesk.core.deps import get_clock
from lexdesk.core.security import create_identity_token
from lexdesk.db.base import Base
from lexdesk.db.session import get_db
from lexdesk.main import app
from lexdesk.models.case import Case
from lexdesk.models.client import Client, Person
from lexdesk.models.enums import AccountType, CaseStatus, IdentityRole
from lexdesk.models.user import User


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def db():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def clock():
    return FrozenClock(datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc))


def _case(lawyer: User, name: str, number: str, opened: date, created: datetime, **kwargs) -> Case:
    return Case(
        case_name=name,
        case_number=number,
        practice_area="Commercial",
        case_stage="Discovery",
        date_opened=opened,
        office="Sydney",
        lawyer=lawyer,
        created_at=created,
        updated_at=created,
        **kwargs,
    )


@pytest.fixture()
def seed(db):
    lawyer = User(email="avery@lexdesk.example.com", first_name="Avery", last_name="Stone", firm_name="Stone & Co")
    other_lawyer = User(email="blake@lexdesk.example.com", first_name="Blake", last_name="Hart")
    client = Client(
        company="Northwind Pty Ltd",
        contact_person="Jo Park",
        email="jo@northwind.example.com",
        account_type=AccountType.BUSINESS,
    )
    other_client = Client(
        company="Contoso",
        contact_person="Sam Lee",
        email="sam@contoso.example.com",
        account_type=AccountType.CORPORATE,
    )
    assignee = Person(first_name="Riley", last_name="Quinn", email="riley@lexdesk.example.com")
    db.add_all([lawyer, other_lawyer, client, other_client, assignee])
    db.flush()

    base = datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)
    open_case = _case(lawyer, "Northwind v Contoso", "NW-001", date(2026, 1, 10), base, clients=[client])
    closed_case = _case(
        lawyer,
        "Northwind lease review",
        "NW-002",
        date(2025, 6, 1),
        base + timedelta(hours=1),
        clients=[client],
        status=CaseStatus.CLOSED,
    )
    other_case = _case(other_lawyer, "Contoso merger", "CT-001", date(2026, 2, 1), base + timedelta(hours=2))
    db.add_all([open_case, closed_case, other_case])
    db.commit()

    return SimpleNamespace(
        lawyer=lawyer,
        other_lawyer=other_lawyer,
        client=client,
        other_client=other_client,
        assignee=assignee,
        open_case=open_case,
        closed_case=closed_case,
        other_case=other_case,
    )


@pytest.fixture()
def auth_headers():
    def _headers(subject_id: int, role: IdentityRole = IdentityRole.LAWYER) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_identity_token(subject_id, role)}"}

    return _headers


@pytest.fixture()
def api(db, clock):
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    client_instance = TestClient(app)
    try:
        yield client_instance
    finally:
        client_instance.close()
        app.dependency_overrides.clear()
