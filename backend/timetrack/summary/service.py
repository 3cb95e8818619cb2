from __future__ import annotations
from datetime import date
from typing import List

from timetrack.core.logging import get_logger
from timetrack.core.observability import summaries_computed, tracer
from timetrack.models import Project
from timetrack.store import RecordStore

from .leave_summary import leave_summary
from .models import LeaveSummary, ProjectTotal, TimeSummary, WeeklyReport
from .time_summary import project_totals, time_summary, trailing_week, week_bounds, weekly_report

logger = get_logger(__name__)


def employee_time_summary(store: RecordStore, employee_id: int, today: date) -> TimeSummary:
    with tracer.start_as_current_span("summary.time") as span:
        span.set_attribute("employee.id", employee_id)
        start, end = trailing_week(today)
        entries = store.entries_between(employee_id, start, end)
        summary = time_summary(entries, store.project_names(), today)
    summaries_computed.add(1, {"kind": "time"})
    logger.debug("time_summary_computed", employee_id=employee_id, entries=len(entries))
    return summary


def employee_leave_summary(store: RecordStore, employee_id: int) -> LeaveSummary:
    with tracer.start_as_current_span("summary.leave") as span:
        span.set_attribute("employee.id", employee_id)
        summary = leave_summary(store.allocations_for(employee_id), store.applications_for(employee_id))
    summaries_computed.add(1, {"kind": "leave"})
    return summary


def employee_weekly_report(store: RecordStore, employee_id: int, anchor: date) -> WeeklyReport:
    start, end = week_bounds(anchor)
    with tracer.start_as_current_span("summary.weekly_report"):
        report = weekly_report(store.entries_between(employee_id, start, end), store.project_names(), anchor)
    summaries_computed.add(1, {"kind": "weekly_report"})
    return report


def employee_project_totals(store: RecordStore, employee_id: int) -> List[ProjectTotal]:
    with tracer.start_as_current_span("summary.project_totals"):
        totals = project_totals(store.entries_for_employee(employee_id), store.list_all(Project))
    summaries_computed.add(1, {"kind": "project_totals"})
    return totals
