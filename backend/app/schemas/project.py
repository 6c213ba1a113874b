from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class ProjectCreate(BaseModel):
    """Fields a parent submits. Storage is the only validator beyond JSON types."""

    title: str | None = None
    description: str | None = None
    grade_level: str | None = None
    budget: Decimal | None = None
    delivery_type: str | None = None
    difficulty: str | None = None
    deadline: date | None = None
    category: str | None = None


class ProjectFilters(BaseModel):
    cost: str | None = None
    difficulty: str | None = None
    category: str | None = None
