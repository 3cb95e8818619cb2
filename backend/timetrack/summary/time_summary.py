"""Hour totals derived from time entries.

Every function here is pure: callers load the entries (and project names) from
the store and pass in the reference date, so results depend only on the
arguments.
"""
from __future__ import annotations
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Tuple

from timetrack.models import Project, TimeEntry

from .models import NO_PROJECT, DayReport, ProjectTotal, TimeSummary, TopProject, WeeklyReport

TRAILING_DAYS = 7


def trailing_week(today: date) -> Tuple[date, date]:
    """The seven calendar days ending at and including ``today``."""
    return today - timedelta(days=TRAILING_DAYS - 1), today


def week_bounds(anchor: date) -> Tuple[date, date]:
    start = anchor - timedelta(days=anchor.weekday())
    end = start + timedelta(days=6)
    return start, end


def _sum_hours(entries: Iterable[TimeEntry]) -> float:
    return round(sum(float(e.hours) for e in entries), 2)


def top_project(entries: Iterable[TimeEntry], project_names: Mapping[int, str]) -> TopProject:
    """Project with the most hours among ``entries``.

    Entries must arrive in insertion order: on equal hours the project seen
    first keeps the lead.
    """
    hours_by_project: Dict[int, float] = {}
    for entry in entries:
        hours_by_project[entry.project_id] = hours_by_project.get(entry.project_id, 0.0) + float(entry.hours)

    best_id, best_hours = None, 0.0
    for project_id, hours in hours_by_project.items():
        if hours > best_hours:
            best_id, best_hours = project_id, hours

    if best_id is None:
        return TopProject()
    return TopProject(name=project_names.get(best_id, NO_PROJECT), hours=round(best_hours, 2))


def time_summary(entries: Iterable[TimeEntry], project_names: Mapping[int, str], today: date) -> TimeSummary:
    yesterday = today - timedelta(days=1)
    start, end = trailing_week(today)
    week_entries = [e for e in entries if start <= e.work_date <= end]

    return TimeSummary(
        today_hours=_sum_hours(e for e in week_entries if e.work_date == today),
        yesterday_hours=_sum_hours(e for e in week_entries if e.work_date == yesterday),
        week_total=_sum_hours(week_entries),
        top_project=top_project(week_entries, project_names),
    )


def weekly_report(entries: Iterable[TimeEntry], project_names: Mapping[int, str], anchor: date) -> WeeklyReport:
    start, end = week_bounds(anchor)
    report = WeeklyReport(week_start=start, week_end=end)
    days_by_date: Dict[date, DayReport] = {}
    for offset in range(7):
        current = start + timedelta(days=offset)
        day = DayReport(day=current.strftime("%a"), worked_date=current)
        report.days.append(day)
        days_by_date[current] = day

    for entry in entries:
        day = days_by_date.get(entry.work_date)
        if day is None:
            continue
        name = project_names.get(entry.project_id, f"Project {entry.project_id}")
        day.add(name, float(entry.hours))
    return report


def project_totals(entries: Iterable[TimeEntry], projects: Iterable[Project]) -> List[ProjectTotal]:
    totals = {p.id: ProjectTotal(project_id=p.id, name=p.name) for p in projects}
    hours: Dict[int, float] = defaultdict(float)
    for entry in entries:
        hours[entry.project_id] += float(entry.hours)
    # Entries against unknown projects are left out
    for project_id, total in totals.items():
        total.hours = round(hours.get(project_id, 0.0), 2)
    return sorted(totals.values(), key=lambda t: t.hours, reverse=True)
