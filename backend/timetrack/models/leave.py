from typing import Literal, get_args

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from timetrack.db.session import Base, utcnow

LeaveStatus = Literal["pending", "approved", "rejected"]
LEAVE_STATUSES: tuple[str, ...] = get_args(LeaveStatus)


class LeaveType(Base):
    __tablename__ = "leave_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default="#2563EB")  # UI hint


class LeaveAllocation(Base):
    __tablename__ = "leave_allocations"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    leave_type_id = Column(Integer, ForeignKey("leave_types.id"), nullable=False)
    allocated_days = Column(Numeric(4, 1), nullable=False)
    year = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    leave_type = relationship("LeaveType", lazy="joined")


class LeaveApplication(Base):
    __tablename__ = "leave_applications"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    leave_type_id = Column(Integer, ForeignKey("leave_types.id"), nullable=False)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=False)
    is_half_day = Column(Boolean, nullable=False, default=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    approved_by_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    leave_type = relationship("LeaveType", lazy="joined")

    __table_args__ = (
        CheckConstraint(status.in_(LEAVE_STATUSES), name="ck_leave_applications_status"),
    )
