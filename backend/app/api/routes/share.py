"""
Public share route; no authentication.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.travel import TravelDetailResponse
from app.services import travel_service

router = APIRouter(prefix="/share", tags=["share"])


@router.get("/{share_token}", response_model=TravelDetailResponse)
async def get_shared_travel(
    share_token: str,
    db: Session = Depends(get_db)
):
    """Read-only travel detail for anyone holding the share token."""
    return travel_service.get_travel_by_share_token(share_token, db)
