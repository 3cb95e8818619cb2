from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from timetrack.api.validation import required_text
from timetrack.core.logging import get_logger
from timetrack.core.observability import records_created
from timetrack.core.security import hash_password
from timetrack.models import Employee
from timetrack.store import RecordStore, get_store

router = APIRouter(prefix="/api/employees", tags=["employees"])
logger = get_logger(__name__)

UPDATABLE_FIELDS = {
    "name": "name",
    "email": "email",
    "employeeId": "employee_code",
    "position": "position",
    "phone": "phone",
}
LABELS = {"name": "Name", "employeeId": "Employee ID", "position": "Position"}


def _normalize_email(value: str) -> str:
    email = value.strip()
    if "@" not in email:
        raise ValueError("Invalid email")
    return email


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str
    password: str = Field(..., min_length=6)
    employeeId: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("name", "employeeId", "position")
    @classmethod
    def strip_text(cls, value: str, info: ValidationInfo) -> str:
        return required_text(value, LABELS[info.field_name])


class EmployeeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    password: str | None = Field(default=None, min_length=6)
    employeeId: str | None = Field(default=None, min_length=1)
    position: str | None = Field(default=None, min_length=1)
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return _normalize_email(value) if value is not None else None

    @field_validator("name", "employeeId", "position")
    @classmethod
    def strip_text(cls, value: str | None, info: ValidationInfo) -> str | None:
        return required_text(value, LABELS[info.field_name])


class EmployeeOut(BaseModel):
    id: int
    name: str
    email: str
    employeeId: str
    position: str
    phone: str | None = None
    notifications: int = 0


def sanitize(row: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=row.id,
        name=row.name,
        email=row.email,
        employeeId=row.employee_code,
        position=row.position,
        phone=row.phone,
        notifications=row.notifications or 0,
    )


def _ensure_unique(store: RecordStore, email: str | None, code: str | None, exclude_id: int | None = None) -> None:
    if email is not None:
        existing = store.employee_by_email(email)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=400, detail="Employee with this email already exists")
    if code is not None:
        existing = store.employee_by_code(code)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=400, detail="Employee with this employee ID already exists")


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(payload: EmployeeCreate, store: RecordStore = Depends(get_store)) -> EmployeeOut:
    _ensure_unique(store, payload.email, payload.employeeId)
    row = store.add(
        Employee(
            name=payload.name,
            email=payload.email,
            hashed_password=hash_password(payload.password),
            employee_code=payload.employeeId,
            position=payload.position,
            phone=payload.phone or None,
            notifications=0,
        )
    )
    records_created.add(1, {"entity": "employee"})
    logger.info("employee_created", employee_id=row.id, employee_code=row.employee_code)
    return sanitize(row)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)) -> EmployeeOut:
    row = store.get(Employee, employee_id)
    if not row:
        raise HTTPException(status_code=404, detail="Employee not found")
    return sanitize(row)


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    payload: EmployeeUpdate,
    employee_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> EmployeeOut:
    row = store.get(Employee, employee_id)
    if not row:
        raise HTTPException(status_code=404, detail="Employee not found")

    data = payload.model_dump(exclude_unset=True)
    _ensure_unique(store, data.get("email"), data.get("employeeId"), exclude_id=row.id)

    changes = {
        column: data[field]
        for field, column in UPDATABLE_FIELDS.items()
        if field in data and (data[field] is not None or field == "phone")
    }
    if data.get("password"):
        changes["hashed_password"] = hash_password(data["password"])

    row = store.update(row, changes)
    logger.info("employee_updated", employee_id=row.id, fields=sorted(changes))
    return sanitize(row)
