from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field, field_validator, model_validator

from timetrack.api.deps import current_employee_id, resolve_employee_id
from timetrack.api.validation import required_text
from timetrack.core.logging import get_logger
from timetrack.core.observability import records_created
from timetrack.db.session import utcnow
from timetrack.domains.time_entries.router import parse_calendar_day
from timetrack.models import Employee, LeaveAllocation, LeaveApplication, LeaveStatus, LeaveType
from timetrack.store import RecordStore, get_store
from timetrack.summary.service import employee_leave_summary

router = APIRouter(prefix="/api", tags=["leave"])
logger = get_logger(__name__)

HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


# Leave types


class LeaveTypeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    color: HexColor = "#2563EB"

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return required_text(value, "Name")


class LeaveTypeOut(LeaveTypeCreate):
    id: int


def leave_type_out(row: LeaveType) -> LeaveTypeOut:
    return LeaveTypeOut(id=row.id, name=row.name, description=row.description, color=row.color or "#2563EB")


@router.get("/leave-types", response_model=list[LeaveTypeOut])
def list_leave_types(store: RecordStore = Depends(get_store)) -> list[LeaveTypeOut]:
    return [leave_type_out(row) for row in store.leave_types()]


@router.post("/leave-types", response_model=LeaveTypeOut, status_code=201)
def create_leave_type(payload: LeaveTypeCreate, store: RecordStore = Depends(get_store)) -> LeaveTypeOut:
    row = store.add(LeaveType(name=payload.name, description=payload.description, color=payload.color))
    records_created.add(1, {"entity": "leave_type"})
    logger.info("leave_type_created", leave_type_id=row.id, name=row.name)
    return leave_type_out(row)


# Allocations


class LeaveAllocationCreate(BaseModel):
    employeeId: int = Field(..., gt=0)
    leaveTypeId: int = Field(..., gt=0)
    allocatedDays: Decimal = Field(..., ge=0, max_digits=4, decimal_places=1)
    year: int = Field(..., ge=1900, le=9999)


class LeaveAllocationUpdate(BaseModel):
    allocatedDays: Decimal | None = Field(default=None, ge=0, max_digits=4, decimal_places=1)
    year: int | None = Field(default=None, ge=1900, le=9999)
    leaveTypeId: int | None = Field(default=None, gt=0)


class LeaveAllocationOut(BaseModel):
    id: int
    employeeId: int
    leaveTypeId: int
    allocatedDays: float
    year: int
    createdAt: datetime | None = None
    leaveType: LeaveTypeOut | None = None


def allocation_out(row: LeaveAllocation) -> LeaveAllocationOut:
    return LeaveAllocationOut(
        id=row.id,
        employeeId=row.employee_id,
        leaveTypeId=row.leave_type_id,
        allocatedDays=float(row.allocated_days),
        year=row.year,
        createdAt=row.created_at,
        leaveType=leave_type_out(row.leave_type) if row.leave_type else None,
    )


def _require(store: RecordStore, model, record_id: int | None, label: str) -> None:
    if record_id is not None and not store.get(model, record_id):
        raise HTTPException(status_code=400, detail=f"{label} {record_id} does not exist")


@router.get("/leave-allocations", response_model=list[LeaveAllocationOut])
def list_leave_allocations(
    employee_id: int = Depends(resolve_employee_id),
    store: RecordStore = Depends(get_store),
) -> list[LeaveAllocationOut]:
    return [allocation_out(row) for row in store.allocations_for(employee_id)]


@router.post("/leave-allocations", response_model=LeaveAllocationOut, status_code=201)
def create_leave_allocation(
    payload: LeaveAllocationCreate, store: RecordStore = Depends(get_store)
) -> LeaveAllocationOut:
    _require(store, Employee, payload.employeeId, "Employee")
    _require(store, LeaveType, payload.leaveTypeId, "Leave type")
    row = store.add(
        LeaveAllocation(
            employee_id=payload.employeeId,
            leave_type_id=payload.leaveTypeId,
            allocated_days=payload.allocatedDays,
            year=payload.year,
        )
    )
    records_created.add(1, {"entity": "leave_allocation"})
    logger.info("leave_allocation_created", allocation_id=row.id, employee_id=row.employee_id, year=row.year)
    return allocation_out(row)


@router.put("/leave-allocations/{allocation_id}", response_model=LeaveAllocationOut)
def update_leave_allocation(
    payload: LeaveAllocationUpdate,
    allocation_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> LeaveAllocationOut:
    row = store.get(LeaveAllocation, allocation_id)
    if not row:
        raise HTTPException(status_code=404, detail="Leave allocation not found")
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    _require(store, LeaveType, data.get("leaveTypeId"), "Leave type")

    columns = {"allocatedDays": "allocated_days", "year": "year", "leaveTypeId": "leave_type_id"}
    row = store.update(row, {columns[key]: value for key, value in data.items()})
    logger.info("leave_allocation_updated", allocation_id=row.id, fields=sorted(data))
    return allocation_out(row)


# Applications


class LeaveApplicationCreate(BaseModel):
    leaveTypeId: int = Field(..., gt=0)
    fromDate: date
    toDate: date
    isHalfDay: bool = False
    reason: str = Field(..., min_length=1)
    employeeId: int | None = Field(default=None, gt=0)

    @field_validator("fromDate", "toDate", mode="before")
    @classmethod
    def normalize_dates(cls, value: object) -> object:
        return parse_calendar_day(value)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, value: str) -> str:
        return required_text(value, "Reason")

    @model_validator(mode="after")
    def check_range(self) -> "LeaveApplicationCreate":
        if self.toDate < self.fromDate:
            raise ValueError("toDate must be on or after fromDate")
        return self


class LeaveApplicationUpdate(BaseModel):
    leaveTypeId: int | None = Field(default=None, gt=0)
    fromDate: date | None = None
    toDate: date | None = None
    isHalfDay: bool | None = None
    reason: str | None = Field(default=None, min_length=1)

    @field_validator("fromDate", "toDate", mode="before")
    @classmethod
    def normalize_dates(cls, value: object) -> object:
        return parse_calendar_day(value)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, value: str | None) -> str | None:
        return required_text(value, "Reason")


class ApproveRequest(BaseModel):
    approvedById: int = Field(..., gt=0)


class RejectRequest(BaseModel):
    approvedById: int | None = Field(default=None, gt=0)
    rejectionReason: Annotated[str, Field(min_length=3, max_length=500)]

    @field_validator("rejectionReason")
    @classmethod
    def strip_rejection_reason(cls, value: str) -> str:
        return required_text(value, "Rejection reason", min_length=3)


class LeaveApplicationOut(BaseModel):
    id: int
    employeeId: int
    leaveTypeId: int
    fromDate: date
    toDate: date
    isHalfDay: bool
    reason: str
    status: LeaveStatus
    approvedById: int | None = None
    approvedAt: datetime | None = None
    rejectionReason: str | None = None
    createdAt: datetime | None = None
    leaveType: LeaveTypeOut | None = None


class MessageResponse(BaseModel):
    message: str


def application_out(row: LeaveApplication) -> LeaveApplicationOut:
    return LeaveApplicationOut(
        id=row.id,
        employeeId=row.employee_id,
        leaveTypeId=row.leave_type_id,
        fromDate=row.from_date,
        toDate=row.to_date,
        isHalfDay=bool(row.is_half_day),
        reason=row.reason,
        status=row.status,
        approvedById=row.approved_by_id,
        approvedAt=row.approved_at,
        rejectionReason=row.rejection_reason,
        createdAt=row.created_at,
        leaveType=leave_type_out(row.leave_type) if row.leave_type else None,
    )


def _get_application(store: RecordStore, application_id: int) -> LeaveApplication:
    row = store.get(LeaveApplication, application_id)
    if not row:
        raise HTTPException(status_code=404, detail="Leave application not found")
    return row


def _ensure_pending(row: LeaveApplication) -> None:
    if row.status != "pending":
        raise HTTPException(status_code=409, detail=f"Leave application already {row.status}")


@router.get("/leave-applications", response_model=list[LeaveApplicationOut])
def list_leave_applications(
    employee_id: int = Depends(resolve_employee_id),
    store: RecordStore = Depends(get_store),
) -> list[LeaveApplicationOut]:
    return [application_out(row) for row in store.applications_for(employee_id)]


@router.get("/leave-applications/{application_id}", response_model=LeaveApplicationOut)
def get_leave_application(
    application_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)
) -> LeaveApplicationOut:
    return application_out(_get_application(store, application_id))


@router.post("/leave-applications", response_model=LeaveApplicationOut, status_code=201)
def create_leave_application(
    payload: LeaveApplicationCreate, store: RecordStore = Depends(get_store)
) -> LeaveApplicationOut:
    employee_id = payload.employeeId or current_employee_id()
    _require(store, Employee, employee_id, "Employee")
    _require(store, LeaveType, payload.leaveTypeId, "Leave type")

    row = store.add(
        LeaveApplication(
            employee_id=employee_id,
            leave_type_id=payload.leaveTypeId,
            from_date=payload.fromDate,
            to_date=payload.toDate,
            is_half_day=payload.isHalfDay,
            reason=payload.reason,
            status="pending",
        )
    )
    records_created.add(1, {"entity": "leave_application"})
    logger.info(
        "leave_application_created",
        application_id=row.id,
        employee_id=employee_id,
        from_date=row.from_date.isoformat(),
        to_date=row.to_date.isoformat(),
    )
    return application_out(row)


@router.put("/leave-applications/{application_id}", response_model=LeaveApplicationOut)
def update_leave_application(
    payload: LeaveApplicationUpdate,
    application_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> LeaveApplicationOut:
    row = _get_application(store, application_id)
    _ensure_pending(row)
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    _require(store, LeaveType, data.get("leaveTypeId"), "Leave type")

    from_date = data.get("fromDate", row.from_date)
    to_date = data.get("toDate", row.to_date)
    if to_date < from_date:
        raise HTTPException(status_code=400, detail="toDate must be on or after fromDate")

    columns = {
        "leaveTypeId": "leave_type_id",
        "fromDate": "from_date",
        "toDate": "to_date",
        "isHalfDay": "is_half_day",
        "reason": "reason",
    }
    row = store.update(row, {columns[key]: value for key, value in data.items()})
    logger.info("leave_application_updated", application_id=row.id, fields=sorted(data))
    return application_out(row)


@router.post("/leave-applications/{application_id}/approve", response_model=LeaveApplicationOut)
def approve_leave_application(
    payload: ApproveRequest,
    application_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> LeaveApplicationOut:
    row = _get_application(store, application_id)
    _ensure_pending(row)
    _require(store, Employee, payload.approvedById, "Employee")

    row = store.update(
        row,
        {"status": "approved", "approved_by_id": payload.approvedById, "approved_at": utcnow()},
    )
    logger.info("leave_application_approved", application_id=row.id, approved_by=payload.approvedById)
    return application_out(row)


@router.post("/leave-applications/{application_id}/reject", response_model=LeaveApplicationOut)
def reject_leave_application(
    payload: RejectRequest,
    application_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> LeaveApplicationOut:
    row = _get_application(store, application_id)
    _ensure_pending(row)
    _require(store, Employee, payload.approvedById, "Employee")

    row = store.update(
        row,
        {
            "status": "rejected",
            "approved_by_id": payload.approvedById,
            "approved_at": utcnow(),
            "rejection_reason": payload.rejectionReason,
        },
    )
    logger.info("leave_application_rejected", application_id=row.id)
    return application_out(row)


@router.delete("/leave-applications/{application_id}", response_model=MessageResponse)
def delete_leave_application(
    application_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)
) -> MessageResponse:
    row = _get_application(store, application_id)
    store.delete(row)
    logger.info("leave_application_deleted", application_id=application_id)
    return MessageResponse(message="Leave application deleted successfully")


# Summary


class LeaveBalanceOut(BaseModel):
    leaveType: LeaveTypeOut | None
    allocated: float
    used: float
    pending: float
    remaining: float


class LeaveSummaryOut(BaseModel):
    allocations: list[LeaveBalanceOut]
    totalAllocated: float
    totalUsed: float
    totalPending: float
    totalRemaining: float


@router.get("/leave-summary", response_model=LeaveSummaryOut)
def leave_summary(
    employee_id: int = Depends(resolve_employee_id),
    store: RecordStore = Depends(get_store),
) -> LeaveSummaryOut:
    summary = employee_leave_summary(store, employee_id)
    return LeaveSummaryOut(
        allocations=[
            LeaveBalanceOut(
                leaveType=leave_type_out(balance.leave_type) if balance.leave_type else None,
                allocated=balance.allocated,
                used=balance.used,
                pending=balance.pending,
                remaining=balance.remaining,
            )
            for balance in summary.allocations
        ],
        totalAllocated=summary.total_allocated,
        totalUsed=summary.total_used,
        totalPending=summary.total_pending,
        totalRemaining=summary.total_remaining,
    )
