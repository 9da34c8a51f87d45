import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from optima_api.database import get_db
from optima_api.models import (
    ErrorResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
)
from optima_api.services import project_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def get_projects(
    session: Annotated[Session, Depends(get_db)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
    status: ProjectStatus | None = None,
) -> list[ProjectResponse]:
    """Get projects in arrival order, optionally filtered by status"""
    projects = project_service.get_projects(session, skip, limit, status)
    return [ProjectResponse.model_validate(project) for project in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
    },
)
async def get_project(
    project_id: int,
    session: Annotated[Session, Depends(get_db)],
) -> ProjectResponse:
    """Get specific project"""
    project = project_service.get_project(session, project_id)
    return ProjectResponse.model_validate(project)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    project_data: ProjectCreate,
    session: Annotated[Session, Depends(get_db)],
) -> ProjectResponse:
    """Create a new pending project"""
    project = project_service.create_project(session, project_data)
    logger.info(f"📋 Project created: {project.id} ({project.title})")
    return ProjectResponse.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
    },
)
async def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    session: Annotated[Session, Depends(get_db)],
) -> ProjectResponse:
    """Update specific project"""
    project = project_service.update_project(session, project_id, project_data)
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
    },
)
async def delete_project(
    project_id: int,
    session: Annotated[Session, Depends(get_db)],
) -> None:
    """Delete specific project"""
    project_service.delete_project(session, project_id)
