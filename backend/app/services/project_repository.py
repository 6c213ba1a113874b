import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.project import Project
from ..models.user import User
from ..schemas.project import ProjectCreate, ProjectFilters
from ..utils.error_handlers import NotFoundError
from ..utils.serialization import row_to_public
from .project_filters import open_listing_predicates

logger = logging.getLogger(__name__)

PROJECT_COLUMNS = (
    "project_id",
    "parent_id",
    "title",
    "description",
    "grade_level",
    "budget",
    "delivery_type",
    "difficulty",
    "deadline",
    "category",
    "status",
    "created_at",
)


def project_to_public(project: Project, *, parent_name: str | None = None, with_parent: bool = False) -> dict:
    payload = row_to_public(project, PROJECT_COLUMNS)
    if with_parent:
        payload["parent_name"] = parent_name
    return payload


class ProjectRepository:
    def __init__(self, db: Session):
        self.db = db

    def _joined(self):
        return (
            self.db.query(Project, User.name.label("parent_name"))
            .join(User, Project.parent_id == User.id)
        )

    @staticmethod
    def _newest_first(query):
        # created_at has second resolution on some backends; id keeps ties stable.
        return query.order_by(Project.created_at.desc(), Project.project_id.desc())

    def create(self, owner_id: int, fields: ProjectCreate) -> dict:
        # Unset fields fall through to the column defaults (online/beginner/open).
        values = fields.model_dump(exclude_unset=True)
        project = Project(parent_id=owner_id, **values)
        try:
            self.db.add(project)
            self.db.commit()
            self.db.refresh(project)
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("Failed to create project for user %s", owner_id)
            raise
        logger.info("Project %s created by user %s", project.project_id, owner_id)
        return project_to_public(project)

    def list_open(self, filters: ProjectFilters | None = None) -> list[dict]:
        filters = filters or ProjectFilters()
        predicates = open_listing_predicates(
            cost=filters.cost,
            difficulty=filters.difficulty,
            category=filters.category,
        )
        rows = self._newest_first(self._joined().filter(*predicates)).all()
        return [project_to_public(p, parent_name=name, with_parent=True) for p, name in rows]

    def get_by_id(self, project_id: int) -> dict:
        row = self._joined().filter(Project.project_id == project_id).first()
        if row is None:
            raise NotFoundError("Project not found")
        project, parent_name = row
        return project_to_public(project, parent_name=parent_name, with_parent=True)

    def list_by_owner(self, owner_id: int) -> list[dict]:
        rows = self._newest_first(self._joined().filter(Project.parent_id == owner_id)).all()
        return [project_to_public(p, parent_name=name, with_parent=True) for p, name in rows]
