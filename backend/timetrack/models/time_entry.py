from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from timetrack.db.session import Base, utcnow


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    work_date = Column(Date, nullable=False, index=True)
    hours = Column(Numeric(4, 2), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    project = relationship("Project")
