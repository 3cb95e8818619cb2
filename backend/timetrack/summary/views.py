from __future__ import annotations

from .models import LeaveSummary, TimeSummary, WeeklyReport


def format_time_summary(summary: TimeSummary, today) -> str:
    rows = [
        f"Time summary for {today.isoformat()}",
        f"Today:      {summary.today_hours:>6.2f}h ({summary.daily_diff:+.2f}h vs yesterday)",
        f"Last 7 days:{summary.week_total:>6.2f}h",
        f"Top project: {summary.top_project.name} ({summary.top_project.hours:.2f}h)",
    ]
    return "\n".join(rows)


def format_leave_summary(summary: LeaveSummary) -> str:
    rows = ["Leave type                 Allocated   Used  Pending  Remaining"]
    for balance in summary.allocations:
        name = balance.leave_type.name if balance.leave_type else "-"
        rows.append(
            f"{name:<26} {balance.allocated:>9.1f} {balance.used:>6.1f} {balance.pending:>8.1f} {balance.remaining:>10.1f}"
        )
    rows.append(
        f"{'Total':<26} {summary.total_allocated:>9.1f} {summary.total_used:>6.1f} "
        f"{summary.total_pending:>8.1f} {summary.total_remaining:>10.1f}"
    )
    return "\n".join(rows)


def format_weekly_report(report: WeeklyReport) -> str:
    rows = [f"Timesheet {report.week_start.isoformat()} - {report.week_end.isoformat()}", "Day  Date        Hours  Projects"]
    for day in report.days:
        projects = ", ".join(f"{name} {hours:g}h" for name, hours in day.projects.items()) or "-"
        rows.append(f"{day.day:<4} {day.worked_date.isoformat()}  {day.total:>5.2f}  {projects}")
    rows.append(f"Total hours: {report.total:.2f}")
    return "\n".join(rows)
