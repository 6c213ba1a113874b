from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.bid import BidCreate
from ..services.bid_repository import BidRepository
from ..utils.dependencies import get_current_user_id

router = APIRouter(prefix="/api", tags=["Bids"])


@router.post("/bids")
def create_bid(
    payload: BidCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return BidRepository(db).create(user_id, payload)


# Any authenticated user may read any project's bids.
@router.get("/projects/{project_id}/bids", dependencies=[Depends(get_current_user_id)])
def list_project_bids(project_id: int, db: Session = Depends(get_db)):
    return BidRepository(db).list_for_project(project_id)
