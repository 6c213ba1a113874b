"""
Listing filter for open projects.

Each recognised query option contributes one optional clause; clauses are
ANDed together and every user-supplied value travels as a bound parameter.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

from ..models.project import Project

OPEN_STATUS = "open"


@dataclass(frozen=True)
class CostBand:
    """Budget range. ``upper=None`` means unbounded."""

    lower: Decimal
    upper: Decimal | None = None
    lower_inclusive: bool = True

    def clause(self, column) -> ColumnElement:
        lower = column >= self.lower if self.lower_inclusive else column > self.lower
        if self.upper is None:
            return lower
        if self.lower == self.upper:
            return column == self.lower
        return and_(lower, column <= self.upper)


COST_BANDS: dict[str, CostBand] = {
    "free": CostBand(Decimal("0"), Decimal("0")),
    "low": CostBand(Decimal("1"), Decimal("1000")),
    "medium": CostBand(Decimal("1001"), Decimal("5000")),
    "high": CostBand(Decimal("5000"), None, lower_inclusive=False),
}


def cost_band(cost: str | None) -> CostBand | None:
    """Band for a ``cost`` option; unknown or empty values mean no constraint."""
    if not cost:
        return None
    return COST_BANDS.get(cost)


class PredicateBuilder:
    """Collects optional WHERE clauses."""

    def __init__(self) -> None:
        self._clauses: list[ColumnElement] = []

    def where(self, clause: ColumnElement | None) -> "PredicateBuilder":
        if clause is not None:
            self._clauses.append(clause)
        return self

    def where_equal(self, column, value: Any) -> "PredicateBuilder":
        if value is None or value == "":
            return self
        return self.where(column == value)

    def where_cost(self, column, cost: str | None) -> "PredicateBuilder":
        band = cost_band(cost)
        return self.where(band.clause(column) if band else None)

    @property
    def clauses(self) -> list[ColumnElement]:
        return list(self._clauses)


def open_listing_predicates(
    cost: str | None = None,
    difficulty: str | None = None,
    category: str | None = None,
) -> list[ColumnElement]:
    return (
        PredicateBuilder()
        .where(Project.status == OPEN_STATUS)
        .where_cost(Project.budget, cost)
        .where_equal(Project.difficulty, difficulty)
        .where_equal(Project.category, category)
        .clauses
    )
