from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field, field_validator

from timetrack.api.deps import current_employee_id, get_today, resolve_employee_id
from timetrack.api.validation import required_text
from timetrack.core.logging import get_logger
from timetrack.core.observability import records_created
from timetrack.domains.projects.router import ProjectOut, project_out
from timetrack.models import Employee, Project, TimeEntry
from timetrack.store import RecordStore, get_store
from timetrack.summary.service import employee_time_summary

router = APIRouter(prefix="/api/time-entries", tags=["time"])
logger = get_logger(__name__)

# Field named "date" below would shadow the type inside class bodies
CalendarDay = date


def parse_calendar_day(value: object) -> object:
    """Reduce ISO date or datetime strings to the calendar day they name."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise ValueError("Invalid date format") from exc
    return value


class TimeEntryCreate(BaseModel):
    date: CalendarDay
    hours: Decimal = Field(..., gt=0, max_digits=4, decimal_places=2)
    description: str = Field(..., min_length=1)
    projectId: int = Field(..., gt=0)
    employeeId: int | None = Field(default=None, gt=0)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: object) -> object:
        return parse_calendar_day(value)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value: str) -> str:
        return required_text(value, "Description")


class TimeEntryUpdate(BaseModel):
    date: CalendarDay | None = None
    hours: Decimal | None = Field(default=None, gt=0, max_digits=4, decimal_places=2)
    description: str | None = Field(default=None, min_length=1)
    projectId: int | None = Field(default=None, gt=0)
    employeeId: int | None = Field(default=None, gt=0)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: object) -> object:
        return parse_calendar_day(value)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value: str | None) -> str | None:
        return required_text(value, "Description")


class TimeEntryOut(BaseModel):
    id: int
    date: CalendarDay
    hours: float
    description: str
    employeeId: int
    projectId: int
    createdAt: datetime | None = None
    project: ProjectOut | None = None


class TopProjectOut(BaseModel):
    name: str
    hours: float


class TimeSummaryOut(BaseModel):
    todayHours: float
    weekTotal: float
    dailyDiff: float
    topProject: TopProjectOut


class MessageResponse(BaseModel):
    message: str


def entry_out(row: TimeEntry) -> TimeEntryOut:
    return TimeEntryOut(
        id=row.id,
        date=row.work_date,
        hours=float(row.hours),
        description=row.description,
        employeeId=row.employee_id,
        projectId=row.project_id,
        createdAt=row.created_at,
        project=project_out(row.project) if row.project else None,
    )


def _get_or_404(store: RecordStore, entry_id: int) -> TimeEntry:
    row = store.get(TimeEntry, entry_id)
    if not row:
        raise HTTPException(status_code=404, detail="Time entry not found")
    return row


def _check_references(store: RecordStore, employee_id: int | None, project_id: int | None) -> None:
    if employee_id is not None and not store.get(Employee, employee_id):
        raise HTTPException(status_code=400, detail=f"Employee {employee_id} does not exist")
    if project_id is not None and not store.get(Project, project_id):
        raise HTTPException(status_code=400, detail=f"Project {project_id} does not exist")


@router.get("", response_model=list[TimeEntryOut])
def list_time_entries(
    employee_id: int = Depends(resolve_employee_id),
    on: date | None = Query(default=None, alias="date"),
    start: date | None = Query(default=None, alias="from"),
    end: date | None = Query(default=None, alias="to"),
    store: RecordStore = Depends(get_store),
) -> list[TimeEntryOut]:
    if on is not None:
        rows = store.entries_on(employee_id, on)
    elif start is not None or end is not None:
        rows = store.entries_between(employee_id, start or date.min, end or date.max)
        rows = sorted(rows, key=lambda e: e.work_date, reverse=True)
    else:
        rows = store.entries_for_employee(employee_id)
    return [entry_out(row) for row in rows]


# Declared before /{entry_id} so "summary" is not parsed as an id
@router.get("/summary", response_model=TimeSummaryOut)
def time_entry_summary(
    employee_id: int = Depends(resolve_employee_id),
    today: date = Depends(get_today),
    store: RecordStore = Depends(get_store),
) -> TimeSummaryOut:
    summary = employee_time_summary(store, employee_id, today)
    return TimeSummaryOut(
        todayHours=summary.today_hours,
        weekTotal=summary.week_total,
        dailyDiff=summary.daily_diff,
        topProject=TopProjectOut(name=summary.top_project.name, hours=summary.top_project.hours),
    )


@router.get("/{entry_id}", response_model=TimeEntryOut)
def get_time_entry(entry_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)) -> TimeEntryOut:
    return entry_out(_get_or_404(store, entry_id))


@router.post("", response_model=TimeEntryOut, status_code=201)
def create_time_entry(payload: TimeEntryCreate, store: RecordStore = Depends(get_store)) -> TimeEntryOut:
    employee_id = payload.employeeId or current_employee_id()
    _check_references(store, employee_id, payload.projectId)

    row = store.add(
        TimeEntry(
            employee_id=employee_id,
            project_id=payload.projectId,
            work_date=payload.date,
            hours=payload.hours,
            description=payload.description,
        )
    )
    records_created.add(1, {"entity": "time_entry"})
    logger.info(
        "time_entry_created",
        entry_id=row.id,
        employee_id=employee_id,
        project_id=row.project_id,
        work_date=row.work_date.isoformat(),
        hours=float(row.hours),
    )
    return entry_out(row)


@router.put("/{entry_id}", response_model=TimeEntryOut)
def update_time_entry(
    payload: TimeEntryUpdate,
    entry_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> TimeEntryOut:
    row = _get_or_404(store, entry_id)
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    _check_references(store, data.get("employeeId"), data.get("projectId"))

    columns = {
        "date": "work_date",
        "hours": "hours",
        "description": "description",
        "projectId": "project_id",
        "employeeId": "employee_id",
    }
    changes = {columns[key]: value for key, value in data.items()}
    row = store.update(row, changes)
    logger.info("time_entry_updated", entry_id=row.id, fields=sorted(changes))
    return entry_out(row)


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_time_entry(entry_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)) -> MessageResponse:
    row = _get_or_404(store, entry_id)
    store.delete(row)
    logger.info("time_entry_deleted", entry_id=entry_id)
    return MessageResponse(message="Time entry deleted successfully")
