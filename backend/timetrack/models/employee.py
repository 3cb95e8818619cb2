from sqlalchemy import Column, Integer, String

from timetrack.db.session import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)

    # HR-issued code such as EMP001, distinct from the surrogate key
    employee_code = Column(String(50), nullable=False, unique=True)
    position = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    notifications = Column(Integer, nullable=False, default=0)
