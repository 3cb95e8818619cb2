from .employee import Employee
from .leave import LEAVE_STATUSES, LeaveAllocation, LeaveApplication, LeaveStatus, LeaveType
from .project import Project
from .time_entry import TimeEntry

__all__ = [
    "Employee",
    "Project",
    "TimeEntry",
    "LeaveType",
    "LeaveAllocation",
    "LeaveApplication",
    "LEAVE_STATUSES",
    "LeaveStatus",
]
