import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.bid import Bid
from ..models.user import User
from ..schemas.bid import BidCreate
from ..utils.serialization import row_to_public

logger = logging.getLogger(__name__)

BID_COLUMNS = ("bid_id", "project_id", "freelancer_id", "amount", "message", "status", "created_at")


def bid_to_public(bid: Bid, *, freelancer_name: str | None = None, with_freelancer: bool = False) -> dict:
    payload = row_to_public(bid, BID_COLUMNS)
    if with_freelancer:
        payload["freelancer_name"] = freelancer_name
    return payload


class BidRepository:
    """
    Bids against projects.

    Accepted as submitted: the project may be closed, the bidder may own it,
    and repeated bids by the same user are all kept.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, bidder_id: int, payload: BidCreate) -> dict:
        bid = Bid(
            project_id=payload.project_id,
            freelancer_id=bidder_id,
            amount=payload.amount,
            message=payload.message,
        )
        try:
            self.db.add(bid)
            self.db.commit()
            self.db.refresh(bid)
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("Failed to create bid on project %s by user %s", payload.project_id, bidder_id)
            raise
        logger.info("Bid %s placed on project %s by user %s", bid.bid_id, bid.project_id, bidder_id)
        return bid_to_public(bid)

    def list_for_project(self, project_id: int) -> list[dict]:
        rows = (
            self.db.query(Bid, User.name.label("freelancer_name"))
            .join(User, Bid.freelancer_id == User.id)
            .filter(Bid.project_id == project_id)
            .order_by(Bid.created_at.desc(), Bid.bid_id.desc())
            .all()
        )
        return [bid_to_public(b, freelancer_name=name, with_freelancer=True) for b, name in rows]
