from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field, field_validator

from timetrack.api.validation import required_text
from timetrack.core.logging import get_logger
from timetrack.core.observability import records_created
from timetrack.models import Project
from timetrack.store import RecordStore, get_store

router = APIRouter(prefix="/api/projects", tags=["projects"])
logger = get_logger(__name__)

Priority = Literal["P0", "P1", "P2", "P3"]

COLUMNS = {
    "name": "name",
    "description": "description",
    "channelName": "channel_name",
    "channelId": "channel_id",
    "projectManagerEmail": "project_manager_email",
    "clientName": "client_name",
    "active": "active",
    "priority": "priority",
    "budget": "budget",
}
REQUIRED = {"name", "active", "priority"}


class ProjectBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    channelName: str | None = None
    channelId: str | None = None
    projectManagerEmail: str | None = None
    clientName: str | None = None
    active: bool = True
    priority: Priority = "P2"
    budget: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return required_text(value, "Name")


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    channelName: str | None = None
    channelId: str | None = None
    projectManagerEmail: str | None = None
    clientName: str | None = None
    active: bool | None = None
    priority: Priority | None = None
    budget: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        return required_text(value, "Name")


class ProjectOut(ProjectBase):
    id: int


def project_out(row: Project) -> ProjectOut:
    return ProjectOut(
        id=row.id,
        name=row.name,
        description=row.description,
        channelName=row.channel_name,
        channelId=row.channel_id,
        projectManagerEmail=row.project_manager_email,
        clientName=row.client_name,
        active=bool(row.active),
        priority=row.priority or "P2",
        budget=row.budget,
    )


def _get_or_404(store: RecordStore, project_id: int) -> Project:
    row = store.get(Project, project_id)
    if not row:
        raise HTTPException(status_code=404, detail="Project not found")
    return row


@router.get("", response_model=list[ProjectOut])
def list_projects(store: RecordStore = Depends(get_store)) -> list[ProjectOut]:
    return [project_out(row) for row in store.list_all(Project)]


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)) -> ProjectOut:
    return project_out(_get_or_404(store, project_id))


@router.post("", response_model=ProjectOut, status_code=201)
def create_project(payload: ProjectCreate, store: RecordStore = Depends(get_store)) -> ProjectOut:
    data = payload.model_dump()
    row = store.add(Project(**{COLUMNS[key]: value for key, value in data.items()}))
    records_created.add(1, {"entity": "project"})
    logger.info("project_created", project_id=row.id, priority=row.priority)
    return project_out(row)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    payload: ProjectUpdate,
    project_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
) -> ProjectOut:
    row = _get_or_404(store, project_id)
    changes = {
        COLUMNS[key]: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED
    }
    row = store.update(row, changes)
    logger.info("project_updated", project_id=row.id, fields=sorted(changes))
    return project_out(row)
