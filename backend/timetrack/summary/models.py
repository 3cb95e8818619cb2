from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from timetrack.models import LeaveType

NO_PROJECT = "None"


@dataclass
class TopProject:
    name: str = NO_PROJECT
    hours: float = 0.0


@dataclass
class TimeSummary:
    today_hours: float = 0.0
    yesterday_hours: float = 0.0
    week_total: float = 0.0
    top_project: TopProject = field(default_factory=TopProject)

    @property
    def daily_diff(self) -> float:
        return round(self.today_hours - self.yesterday_hours, 2)


@dataclass
class LeaveBalance:
    leave_type: Optional[LeaveType]
    allocated: float = 0.0
    used: float = 0.0
    pending: float = 0.0

    @property
    def remaining(self) -> float:
        # Over-allocation is reported as a negative balance, not clamped
        return self.allocated - self.used - self.pending


@dataclass
class LeaveSummary:
    allocations: List[LeaveBalance] = field(default_factory=list)

    @property
    def total_allocated(self) -> float:
        return sum(b.allocated for b in self.allocations)

    @property
    def total_used(self) -> float:
        return sum(b.used for b in self.allocations)

    @property
    def total_pending(self) -> float:
        return sum(b.pending for b in self.allocations)

    @property
    def total_remaining(self) -> float:
        return sum(b.remaining for b in self.allocations)


@dataclass
class DayReport:
    day: str
    worked_date: date
    total: float = 0.0
    projects: Dict[str, float] = field(default_factory=dict)

    def add(self, project_name: str, hours: float) -> None:
        self.total = round(self.total + hours, 2)
        self.projects[project_name] = round(self.projects.get(project_name, 0.0) + hours, 2)


@dataclass
class WeeklyReport:
    week_start: date
    week_end: date
    days: List[DayReport] = field(default_factory=list)

    @property
    def total(self) -> float:
        return round(sum(d.total for d in self.days), 2)


@dataclass
class ProjectTotal:
    project_id: int
    name: str
    hours: float = 0.0
