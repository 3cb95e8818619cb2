from __future__ import annotations
import argparse
from datetime import date

from timetrack.core.config import settings
from timetrack.core.logging import configure_logging
from timetrack.db.session import create_tables, session_scope
from timetrack.seed.seed_data import seed
from timetrack.store import RecordStore
from timetrack.summary.service import employee_leave_summary, employee_time_summary, employee_weekly_report
from timetrack.summary.views import format_leave_summary, format_time_summary, format_weekly_report


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def cmd_init_db(args: argparse.Namespace) -> None:
    create_tables()
    print("Created tables")


def cmd_seed(args: argparse.Namespace) -> None:
    create_tables()
    with session_scope() as session:
        loaded = seed(session, today=args.today)
    print("Loaded demo data" if loaded else "Database already has employees; nothing seeded")


def cmd_summary(args: argparse.Namespace) -> None:
    today = args.today or date.today()
    with session_scope() as session:
        summary = employee_time_summary(RecordStore(session), args.employee, today)
        print(format_time_summary(summary, today))


def cmd_leave_summary(args: argparse.Namespace) -> None:
    with session_scope() as session:
        print(format_leave_summary(employee_leave_summary(RecordStore(session), args.employee)))


def cmd_timesheet(args: argparse.Namespace) -> None:
    with session_scope() as session:
        print(format_weekly_report(employee_weekly_report(RecordStore(session), args.employee, args.anchor)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Employee time tracking CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    init_db = sub.add_parser("init-db", help="Create database tables")
    init_db.set_defaults(func=cmd_init_db)

    seed_cmd = sub.add_parser("seed", help="Load demo employees, projects, entries and leave")
    seed_cmd.add_argument("--today", type=parse_date, help="Date the demo entries are relative to")
    seed_cmd.set_defaults(func=cmd_seed)

    summary = sub.add_parser("summary", help="Today, yesterday and trailing-week hours")
    summary.add_argument("employee", type=int)
    summary.add_argument("--today", type=parse_date)
    summary.set_defaults(func=cmd_summary)

    leave = sub.add_parser("leave-summary", help="Leave balances per leave type")
    leave.add_argument("employee", type=int)
    leave.set_defaults(func=cmd_leave_summary)

    timesheet = sub.add_parser("timesheet", help="Render weekly timesheet view")
    timesheet.add_argument("employee", type=int)
    timesheet.add_argument("anchor", type=parse_date, help="Any date in the week to show")
    timesheet.set_defaults(func=cmd_timesheet)

    return parser


def main(argv: list[str] | None = None) -> None:
    configure_logging(settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
