from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from timetrack.api.deps import get_today, resolve_employee_id
from timetrack.store import RecordStore, get_store
from timetrack.summary.service import employee_project_totals, employee_weekly_report

router = APIRouter(prefix="/api/reports", tags=["reporting"])


class DayRow(BaseModel):
    day: str
    date: str
    total: float
    projects: dict[str, float]


class WeeklyReportOut(BaseModel):
    weekStart: date
    weekEnd: date
    days: list[DayRow]
    total: float


class ProjectTotalOut(BaseModel):
    id: int
    name: str
    hours: float


@router.get("/weekly", response_model=WeeklyReportOut)
def weekly_report(
    employee_id: int = Depends(resolve_employee_id),
    week_of: date | None = Query(default=None, alias="weekOf"),
    today: date = Depends(get_today),
    store: RecordStore = Depends(get_store),
) -> WeeklyReportOut:
    report = employee_weekly_report(store, employee_id, week_of or today)
    return WeeklyReportOut(
        weekStart=report.week_start,
        weekEnd=report.week_end,
        days=[
            DayRow(day=d.day, date=d.worked_date.isoformat(), total=d.total, projects=d.projects)
            for d in report.days
        ],
        total=report.total,
    )


@router.get("/projects", response_model=list[ProjectTotalOut])
def project_totals(
    employee_id: int = Depends(resolve_employee_id),
    store: RecordStore = Depends(get_store),
) -> list[ProjectTotalOut]:
    return [
        ProjectTotalOut(id=t.project_id, name=t.name, hours=t.hours)
        for t in employee_project_totals(store, employee_id)
    ]
