"""
Trip API Endpoints.

Create, update and preview trips. Create and update store the calculated
metrics on the trip; preview returns them without saving anything.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.session import get_db
from backend.app.core.dependencies import get_current_user_id
from backend.app.domain.trips.calculator import TripMetrics
from backend.app.domain.trips.trip_service import TripService
from backend.app.models.trip_enums import TripStatus
from backend.app.schemas.trip import (
    TripCreate, TripPreviewRequest, TripResponse, TripListResponse, TripFilters
)
from backend.app.services.trip_reporting import TripReportingService

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("/preview", response_model=TripMetrics)
async def preview_trip(
    payload: TripPreviewRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Calculate metrics for an unsaved trip form.

    Called on every field change; partially filled forms are accepted.
    Returns 422 ERR_TRIP_VALIDATION when the end odometer is below the start.
    """
    return await TripService.preview_trip_metrics(db, user_id, payload)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    payload: TripCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Create a trip and store its metrics snapshot."""
    trip = await TripService.create_trip(db, user_id, payload)
    return TripResponse.model_validate(trip)


@router.get("", response_model=TripListResponse)
async def list_trips(
    date_from: Optional[date] = Query(None, description="Earliest trip date (inclusive)"),
    date_to: Optional[date] = Query(None, description="Latest trip date (inclusive)"),
    vehicle_id: Optional[int] = Query(None, description="Only trips of this vehicle"),
    trip_status: Optional[TripStatus] = Query(None, alias="status", description="profit, breakeven or loss"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    List the user's trips with totals over the filtered selection.

    Totals come from the stored snapshots; nothing is recalculated.
    """
    filters = TripFilters(
        date_from=date_from,
        date_to=date_to,
        vehicle_id=vehicle_id,
        status=trip_status,
    )
    trips = await TripReportingService.list_trips(db, user_id, filters)

    return TripListResponse(
        trips=[TripResponse.model_validate(t) for t in trips],
        total=len(trips),
        totals=TripReportingService.summarize(trips)
    )


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: int = Path(..., description="Trip ID"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    trip = await TripService.get_trip(db, user_id, trip_id)
    return TripResponse.model_validate(trip)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int = Path(..., description="Trip ID"),
    payload: TripCreate = ...,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Replace a trip's inputs and recalculate its snapshot."""
    trip = await TripService.update_trip(db, user_id, trip_id, payload)
    return TripResponse.model_validate(trip)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: int = Path(..., description="Trip ID"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    await TripService.delete_trip(db, user_id, trip_id)
