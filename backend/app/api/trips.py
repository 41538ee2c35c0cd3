"""Trips API: whole-collection load and save per profile."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.db.session import get_session
from backend.app.db.trips import get_trips, save_trips

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trips", tags=["trips"])


class SaveTripsRequest(BaseModel):
    """Request body for saving a trip collection."""

    data: list[dict[str, Any]] = Field(..., description="Full trip collection")


class SaveTripsResponse(BaseModel):
    """Save acknowledgement."""

    success: bool


def _require_profile(profile_id: str) -> str:
    profile_id = profile_id.strip()
    if not profile_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="profileId must not be blank",
        )
    return profile_id


@router.get("", response_model=list[dict[str, Any]])
def load_trips(
    profile_id: str = Query(..., alias="profileId"),
    session: Session = Depends(get_session),
) -> list[Any]:
    """Return the saved trips of a profile (empty list if none)."""
    profile_id = _require_profile(profile_id)
    try:
        return get_trips(session, profile_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load trips for {profile_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load trips",
        ) from e


@router.post("", response_model=SaveTripsResponse)
def store_trips(
    request: SaveTripsRequest,
    profile_id: str = Query(..., alias="profileId"),
    session: Session = Depends(get_session),
) -> SaveTripsResponse:
    """Replace the saved trips of a profile."""
    profile_id = _require_profile(profile_id)
    try:
        save_trips(session, profile_id, request.data)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to save trips for {profile_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save trips",
        ) from e

    logger.info(f"Saved {len(request.data)} trips for profile {profile_id}")
    return SaveTripsResponse(success=True)
