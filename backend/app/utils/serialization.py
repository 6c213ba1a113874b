from datetime import date, datetime
from typing import Any


def iso_value(value: Any) -> Any:
    """Dates and datetimes as ISO strings; anything else unchanged."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def row_to_public(row: Any, columns: tuple[str, ...]) -> dict:
    return {col: iso_value(getattr(row, col)) for col in columns}
