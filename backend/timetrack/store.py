from __future__ import annotations
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from timetrack.db.session import Base, get_session
from timetrack.models import (
    Employee,
    LeaveAllocation,
    LeaveApplication,
    LeaveType,
    Project,
    TimeEntry,
)

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore:
    """Insert/lookup/update/delete over one session, plus the read patterns summaries need."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # Generic CRUD

    def get(self, model: Type[ModelT], record_id: int) -> Optional[ModelT]:
        return self.session.get(model, record_id)

    def list_all(self, model: Type[ModelT]) -> List[ModelT]:
        return self.session.query(model).order_by(model.id.asc()).all()

    def add(self, record: ModelT) -> ModelT:
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def update(self, record: ModelT, changes: Mapping[str, Any]) -> ModelT:
        """Merge ``changes`` into ``record``; attributes not named are left alone."""
        for attribute, value in changes.items():
            setattr(record, attribute, value)
        self.session.commit()
        self.session.refresh(record)
        return record

    def delete(self, record: Base) -> None:
        self.session.delete(record)
        self.session.commit()

    def count(self, model: Type[Base]) -> int:
        return self.session.query(func.count(model.id)).scalar() or 0

    # Employees

    def employee_by_email(self, email: str) -> Optional[Employee]:
        return (
            self.session.query(Employee)
            .filter(func.lower(Employee.email) == email.strip().lower())
            .one_or_none()
        )

    def employee_by_code(self, employee_code: str) -> Optional[Employee]:
        return self.session.query(Employee).filter(Employee.employee_code == employee_code).one_or_none()

    # Projects

    def project_names(self) -> Dict[int, str]:
        return {project_id: name for project_id, name in self.session.query(Project.id, Project.name)}

    # Time entries

    def _entries(self, employee_id: int):
        return (
            self.session.query(TimeEntry)
            .options(joinedload(TimeEntry.project))
            .filter(TimeEntry.employee_id == employee_id)
        )

    def entries_for_employee(self, employee_id: int) -> List[TimeEntry]:
        return self._entries(employee_id).order_by(TimeEntry.work_date.desc(), TimeEntry.id.asc()).all()

    def entries_on(self, employee_id: int, day: date) -> List[TimeEntry]:
        return self._entries(employee_id).filter(TimeEntry.work_date == day).order_by(TimeEntry.id.asc()).all()

    def entries_between(self, employee_id: int, start: date, end: date) -> List[TimeEntry]:
        """Entries dated within ``[start, end]``, in insertion order."""
        return (
            self._entries(employee_id)
            .filter(TimeEntry.work_date >= start, TimeEntry.work_date <= end)
            .order_by(TimeEntry.id.asc())
            .all()
        )

    # Leave

    def leave_types(self) -> List[LeaveType]:
        return self.list_all(LeaveType)

    def allocations_for(self, employee_id: int) -> List[LeaveAllocation]:
        return (
            self.session.query(LeaveAllocation)
            .filter(LeaveAllocation.employee_id == employee_id)
            .order_by(LeaveAllocation.id.asc())
            .all()
        )

    def applications_for(self, employee_id: int) -> List[LeaveApplication]:
        return (
            self.session.query(LeaveApplication)
            .filter(LeaveApplication.employee_id == employee_id)
            .order_by(LeaveApplication.created_at.desc(), LeaveApplication.id.desc())
            .all()
        )


def get_store(db: Session = Depends(get_session)) -> RecordStore:
    return RecordStore(db)
