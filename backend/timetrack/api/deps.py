from datetime import date

from fastapi import Query

from timetrack.core.config import settings


def get_today() -> date:
    """Calendar day of the server clock; overridden in tests to pin "today"."""
    return date.today()


def current_employee_id() -> int:
    return settings.default_employee_id


def resolve_employee_id(
    employee_id: int | None = Query(default=None, alias="employeeId", gt=0),
) -> int:
    if employee_id is None:
        return current_employee_id()
    return employee_id
