from decimal import Decimal

from pydantic import BaseModel


class BidCreate(BaseModel):
    project_id: int
    amount: Decimal | None = None
    message: str | None = None
