from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from timetrack.core.logging import get_logger
from timetrack.core.security import hash_password
from timetrack.models import Employee, LeaveAllocation, LeaveApplication, LeaveType, Project, TimeEntry
from timetrack.store import RecordStore

logger = get_logger(__name__)

DEMO_PASSWORD = "password123"

PROJECTS = [
    ("Website Redesign", "Overhaul of company website", "project-website", "CH001", "sarah@example.com", "Acme Corp", "P1", "$25,000"),
    ("Mobile App", "Mobile app development for clients", "project-mobile", "CH002", "john@example.com", "Beta Industries", "P0", "$120,000"),
    ("Cloud Migration", "Moving infrastructure to the cloud", "project-cloud", "CH003", "sarah@example.com", "Gamma Tech", "P2", "$80,000"),
    ("Data Analysis", "Quarterly data analysis project", "project-data", "CH004", "john@example.com", "Delta Systems", "P3", "$15,000"),
    ("Internal Tools", "Building internal productivity tools", "project-internal", "CH005", "sarah@example.com", "Internal", "P2", "$40,000"),
]

# (days ago, hours, description, project index)
TIME_ENTRIES = [
    (0, "3.5", "API integration for user authentication", 1),
    (0, "2", "Homepage responsive design fixes", 0),
    (1, "4", "Quarterly data visualization", 3),
    (1, "2.5", "UI components for settings screen", 1),
    (2, "5", "Server configuration and database migration", 2),
    (2, "1.5", "Client meeting and requirements gathering", 0),
    (3, "3", "Building analytics dashboard", 3),
    (3, "4", "Mobile app navigation implementation", 1),
]

LEAVE_TYPES = [
    ("Annual Leave", "Regular vacation time", "#10B981", "21"),
    ("Sick Leave", "Time off due to illness", "#EF4444", "10"),
    ("Personal Leave", "Time off for personal matters", "#F59E0B", "5"),
    ("Maternity/Paternity Leave", "Leave for new parents", "#8B5CF6", "0"),
    ("Bereavement Leave", "Leave due to death in family", "#6B7280", "3"),
]


def seed(session: Session, today: date | None = None) -> bool:
    """Load the demo data set; returns False when employees already exist."""
    if RecordStore(session).count(Employee):
        logger.info("seed_skipped", reason="employees_present")
        return False

    today = today or date.today()
    sarah = Employee(
        name="Sarah Johnson",
        email="sarah@example.com",
        hashed_password=hash_password(DEMO_PASSWORD),
        employee_code="EMP001",
        position="Software Engineer",
        phone="555-1234",
    )
    john = Employee(
        name="John Smith",
        email="john@example.com",
        hashed_password=hash_password(DEMO_PASSWORD),
        employee_code="EMP002",
        position="UI Designer",
        phone="555-5678",
    )
    session.add_all([sarah, john])

    projects = [
        Project(
            name=name,
            description=description,
            channel_name=channel_name,
            channel_id=channel_id,
            project_manager_email=manager,
            client_name=client,
            active=True,
            priority=priority,
            budget=budget,
        )
        for name, description, channel_name, channel_id, manager, client, priority, budget in PROJECTS
    ]
    session.add_all(projects)

    leave_types = [LeaveType(name=name, description=description, color=color) for name, description, color, _ in LEAVE_TYPES]
    session.add_all(leave_types)
    session.flush()

    # Added one at a time so ids follow list order
    for days_ago, hours, description, project_index in TIME_ENTRIES:
        session.add(
            TimeEntry(
                employee_id=sarah.id,
                project_id=projects[project_index].id,
                work_date=today - timedelta(days=days_ago),
                hours=Decimal(hours),
                description=description,
            )
        )
        session.flush()

    session.add_all(
        LeaveAllocation(employee_id=sarah.id, leave_type_id=leave_type.id, allocated_days=Decimal(days), year=today.year)
        for leave_type, (_, _, _, days) in zip(leave_types, LEAVE_TYPES)
    )

    vacation_start = today + timedelta(days=10)
    session.add_all(
        [
            LeaveApplication(
                employee_id=sarah.id,
                leave_type_id=leave_types[0].id,
                from_date=vacation_start,
                to_date=vacation_start + timedelta(days=4),
                reason="Family vacation",
                status="pending",
                is_half_day=False,
            ),
            LeaveApplication(
                employee_id=sarah.id,
                leave_type_id=leave_types[1].id,
                from_date=today - timedelta(days=15),
                to_date=today - timedelta(days=13),
                reason="Flu",
                status="approved",
                is_half_day=False,
            ),
            LeaveApplication(
                employee_id=sarah.id,
                leave_type_id=leave_types[2].id,
                from_date=today + timedelta(days=20),
                to_date=today + timedelta(days=20),
                reason="Personal appointment",
                status="pending",
                is_half_day=True,
            ),
        ]
    )
    session.commit()
    logger.info("seed_complete", employees=2, projects=len(projects), time_entries=len(TIME_ENTRIES))
    return True
