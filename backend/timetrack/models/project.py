from sqlalchemy import Boolean, Column, Integer, String, Text

from timetrack.db.session import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # Chat channel the project team works in
    channel_name = Column(String(100), nullable=True)
    channel_id = Column(String(100), nullable=True)

    project_manager_email = Column(String(255), nullable=True)
    client_name = Column(String(200), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    priority = Column(String(2), nullable=False, default="P2")  # P0|P1|P2|P3
    budget = Column(String(100), nullable=True)
