"""
Vehicle API Endpoints.

Lets a user register and manage vehicles and their default trip rates.
Every query is scoped to the calling user.
"""

from typing import List
from fastapi import APIRouter, Depends, status, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from backend.app.db.session import get_db
from backend.app.core.dependencies import get_current_user_id
from backend.app.domain.trips.constants import VEHICLE_TYPE_DEFAULTS
from backend.app.domain.trips.trip_service import TripService
from backend.app.models.trip import Trip
from backend.app.models.vehicle import Vehicle
from backend.app.schemas.vehicle import (
    VehicleCreate, VehicleUpdate, VehicleResponse, VehicleListResponse, VehicleTypeDefaults
)
from backend.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("/type-defaults", response_model=List[VehicleTypeDefaults])
async def list_type_defaults():
    """Suggested default rates per vehicle type, used to pre-fill the vehicle form."""
    return [
        VehicleTypeDefaults(type=vehicle_type, **defaults)
        for vehicle_type, defaults in VEHICLE_TYPE_DEFAULTS.items()
    ]


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new vehicle.

    Default rates omitted from the request are filled from the vehicle type.
    """
    type_defaults = VEHICLE_TYPE_DEFAULTS[vehicle_data.type]
    provided = vehicle_data.model_fields_set

    def default_for(field: str, type_key: str):
        if field in provided:
            return getattr(vehicle_data, field)
        return type_defaults[type_key]

    new_vehicle = Vehicle(
        user_id=user_id,
        name=vehicle_data.name,
        type=vehicle_data.type,
        default_fuel_consumption_l_per_100km=default_for(
            "default_fuel_consumption_l_per_100km", "fuel_consumption_l_per_100km"
        ),
        default_depreciation_uah_per_km=default_for(
            "default_depreciation_uah_per_km", "depreciation_uah_per_km"
        ),
        default_daily_taxes_uah=default_for("default_daily_taxes_uah", "daily_taxes_uah"),
    )

    db.add(new_vehicle)
    await db.commit()
    await db.refresh(new_vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_CREATED,
        actor_id=user_id,
        entity_type="vehicle",
        entity_id=new_vehicle.id,
        metadata={"name": new_vehicle.name, "type": new_vehicle.type.value}
    )

    return VehicleResponse.model_validate(new_vehicle)


@router.get("", response_model=VehicleListResponse)
async def list_vehicles(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """List the user's vehicles ordered by name."""
    result = await db.execute(
        select(Vehicle).where(Vehicle.user_id == user_id).order_by(Vehicle.name)
    )
    vehicles = result.scalars().all()

    return VehicleListResponse(
        vehicles=[VehicleResponse.model_validate(v) for v in vehicles],
        total=len(vehicles)
    )


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    vehicle = await TripService.get_owned_vehicle(db, user_id, vehicle_id)
    return VehicleResponse.model_validate(vehicle)


@router.patch("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    vehicle_data: VehicleUpdate = ...,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Update vehicle details.

    Changing defaults does not touch trips already saved; their snapshots
    keep the rates they were calculated with.
    """
    vehicle = await TripService.get_owned_vehicle(db, user_id, vehicle_id)

    update_data = vehicle_data.model_dump(exclude_unset=True)
    # name and type are required columns; an explicit null leaves them as is
    for required in ("name", "type"):
        if update_data.get(required, ...) is None:
            update_data.pop(required)
    for field, value in update_data.items():
        setattr(vehicle, field, value)

    await db.commit()
    await db.refresh(vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_UPDATED,
        actor_id=user_id,
        entity_type="vehicle",
        entity_id=vehicle.id,
        metadata={"updated_fields": list(update_data.keys())}
    )

    return VehicleResponse.model_validate(vehicle)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Delete a vehicle together with its trips."""
    vehicle = await TripService.get_owned_vehicle(db, user_id, vehicle_id)

    await db.execute(delete(Trip).where(Trip.vehicle_id == vehicle.id))
    await db.delete(vehicle)
    await db.commit()

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_DELETED,
        actor_id=user_id,
        entity_type="vehicle",
        entity_id=vehicle_id,
    )
