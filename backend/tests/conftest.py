from __future__ import annotations

import os
from datetime import date
from decimal import Decimal

# Must be set before timetrack is imported: settings and the engine are built at import
os.environ.setdefault("TIMETRACK_DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMETRACK_AUTO_CREATE_TABLES", "false")
os.environ.setdefault("TIMETRACK_SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timetrack.api.deps import get_today
from timetrack.core.security import hash_password
from timetrack.db.session import Base, get_session
from timetrack.main import app
from timetrack.models import Employee, LeaveAllocation, LeaveApplication, LeaveType, Project, TimeEntry
from timetrack.store import RecordStore

TODAY = date(2025, 1, 15)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_session] = override_get_session
app.dependency_overrides[get_today] = lambda: TODAY


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(session):
    return RecordStore(session)


@pytest.fixture
def employee(store):
    return store.add(
        Employee(
            name="Sarah Johnson",
            email="sarah@example.com",
            hashed_password=hash_password("password123"),
            employee_code="EMP001",
            position="Software Engineer",
            phone="555-1234",
        )
    )


@pytest.fixture
def projects(store):
    return [
        store.add(Project(name="Website Redesign", priority="P1")),
        store.add(Project(name="Mobile App", priority="P0")),
    ]


@pytest.fixture
def leave_types(store):
    return [
        store.add(LeaveType(name="Annual Leave", color="#10B981")),
        store.add(LeaveType(name="Sick Leave", color="#EF4444")),
    ]


def add_entry(store, employee_id, project_id, work_date, hours, description="Work"):
    return store.add(
        TimeEntry(
            employee_id=employee_id,
            project_id=project_id,
            work_date=work_date,
            hours=Decimal(str(hours)),
            description=description,
        )
    )


def add_allocation(store, employee_id, leave_type_id, days, year=2025):
    return store.add(
        LeaveAllocation(employee_id=employee_id, leave_type_id=leave_type_id, allocated_days=Decimal(str(days)), year=year)
    )


def add_application(store, employee_id, leave_type_id, from_date, to_date, status="pending", is_half_day=False):
    return store.add(
        LeaveApplication(
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            from_date=from_date,
            to_date=to_date,
            is_half_day=is_half_day,
            reason="Time off",
            status=status,
        )
    )
