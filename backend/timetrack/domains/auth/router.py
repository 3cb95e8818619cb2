from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from timetrack.api.deps import current_employee_id
from timetrack.core.logging import get_logger
from timetrack.core.security import verify_password
from timetrack.domains.employees.router import EmployeeOut, sanitize
from timetrack.models import Employee
from timetrack.store import RecordStore, get_store

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = get_logger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        email = value.strip()
        if "@" not in email:
            raise ValueError("Invalid email")
        return email


class MessageResponse(BaseModel):
    message: str


@router.post("/login", response_model=EmployeeOut)
def login(payload: LoginRequest, store: RecordStore = Depends(get_store)) -> EmployeeOut:
    logger.info("login_attempt", email=payload.email)
    employee = store.employee_by_email(payload.email)

    if not employee or not verify_password(payload.password, employee.hashed_password):
        logger.info("login_failed", email=payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    logger.info("login_success", employee_id=employee.id)
    return sanitize(employee)


@router.get("/me", response_model=EmployeeOut)
def me(
    employee_id: int = Depends(current_employee_id),
    store: RecordStore = Depends(get_store),
) -> EmployeeOut:
    # No session yet: the configured default employee is the signed-in user
    employee = store.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return sanitize(employee)


@router.post("/logout", response_model=MessageResponse)
def logout() -> MessageResponse:
    return MessageResponse(message="Logged out successfully")
