from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.project import ProjectCreate, ProjectFilters
from ..services.project_repository import ProjectRepository
from ..utils.dependencies import get_current_user_id

router = APIRouter(prefix="/api", tags=["Projects"])


@router.post("/projects")
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return ProjectRepository(db).create(user_id, payload)


@router.get("/projects")
def list_projects(
    cost: str | None = Query(default=None, description="free / low / medium / high"),
    difficulty: str | None = Query(default=None),
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    filters = ProjectFilters(cost=cost, difficulty=difficulty, category=category)
    return ProjectRepository(db).list_open(filters)


@router.get("/projects/{project_id}")
def get_project(project_id: int, db: Session = Depends(get_db)):
    return ProjectRepository(db).get_by_id(project_id)


@router.get("/my-projects")
def my_projects(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return ProjectRepository(db).list_by_owner(user_id)
