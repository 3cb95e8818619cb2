from __future__ import annotations
from datetime import date
from typing import Iterable, List

from timetrack.models import LeaveAllocation, LeaveApplication

from .models import LeaveBalance, LeaveSummary


def leave_days(from_date: date, to_date: date, is_half_day: bool = False) -> float:
    days = (to_date - from_date).days + 1
    return days * 0.5 if is_half_day else float(days)


def _days_with_status(applications: Iterable[LeaveApplication], leave_type_id: int, status: str) -> float:
    return sum(
        leave_days(a.from_date, a.to_date, bool(a.is_half_day))
        for a in applications
        if a.leave_type_id == leave_type_id and a.status == status
    )


def leave_summary(allocations: Iterable[LeaveAllocation], applications: Iterable[LeaveApplication]) -> LeaveSummary:
    """Balance per allocation: approved leave counts as used, pending as reserved."""
    application_list: List[LeaveApplication] = list(applications)
    summary = LeaveSummary()
    for allocation in allocations:
        summary.allocations.append(
            LeaveBalance(
                leave_type=allocation.leave_type,
                allocated=float(allocation.allocated_days),
                used=_days_with_status(application_list, allocation.leave_type_id, "approved"),
                pending=_days_with_status(application_list, allocation.leave_type_id, "pending"),
            )
        )
    return summary
