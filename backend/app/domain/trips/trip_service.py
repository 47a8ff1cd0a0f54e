"""
Trip Service (Domain Logic).

Assembles calculator input from a validated payload and the vehicle's
defaults, runs the metrics calculation and stores the result as a snapshot
on the trip row. The calculation runs before any write, so an invalid trip
never reaches the database.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from backend.app.core.config import settings
from backend.app.core.exceptions import ResourceNotFoundError
from backend.app.domain.trips.calculator import (
    TripInput,
    TripMetrics,
    calculate_trip_metrics,
    normalize_days_count,
)
from backend.app.models.trip import Trip
from backend.app.models.vehicle import Vehicle
from backend.app.schemas.trip import TripCreate, TripFields
from backend.app.services.audit import log_event, AuditAction

logger = logging.getLogger("trips")


def _first_set(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


class TripService:

    @staticmethod
    async def get_owned_vehicle(db: AsyncSession, user_id: str, vehicle_id: int) -> Vehicle:
        """
        Fetch a vehicle belonging to the user.

        Raises:
            ResourceNotFoundError: If the vehicle does not exist or is not the user's
        """
        result = await db.execute(
            select(Vehicle).where(Vehicle.id == vehicle_id, Vehicle.user_id == user_id)
        )
        vehicle = result.scalar_one_or_none()
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", vehicle_id)
        return vehicle

    @staticmethod
    async def get_trip(db: AsyncSession, user_id: str, trip_id: int) -> Trip:
        result = await db.execute(
            select(Trip).where(Trip.id == trip_id, Trip.user_id == user_id)
        )
        trip = result.scalar_one_or_none()
        if not trip:
            raise ResourceNotFoundError("Trip", trip_id)
        return trip

    @staticmethod
    def build_trip_input(
        payload: TripFields,
        user_id: Optional[str] = None,
        vehicle: Optional[Vehicle] = None,
    ) -> TripInput:
        """
        Merge a trip payload with vehicle defaults into calculator input.

        Fuel consumption, depreciation and daily taxes fall back to the
        vehicle's defaults; daily taxes finally fall back to the configured
        default. The other fields are passed through as submitted.
        """
        fuel_consumption = payload.fuel_consumption_l_per_100km
        depreciation = payload.depreciation_uah_per_km
        daily_taxes = payload.daily_taxes_uah

        if vehicle is not None:
            fuel_consumption = _first_set(fuel_consumption, vehicle.default_fuel_consumption_l_per_100km)
            depreciation = _first_set(depreciation, vehicle.default_depreciation_uah_per_km)
            daily_taxes = _first_set(daily_taxes, vehicle.default_daily_taxes_uah)

        daily_taxes = _first_set(daily_taxes, settings.default_daily_taxes_uah)

        return TripInput(
            user_id=user_id,
            vehicle_id=getattr(payload, "vehicle_id", None),
            name=getattr(payload, "name", None),
            trip_date=getattr(payload, "trip_date", None),
            trip_type=getattr(payload, "trip_type", None),
            notes=getattr(payload, "notes", None),
            start_odometer_km=payload.start_odometer_km,
            end_odometer_km=payload.end_odometer_km,
            fuel_consumption_l_per_100km=fuel_consumption,
            fuel_price_uah_per_l=payload.fuel_price_uah_per_l,
            depreciation_uah_per_km=depreciation,
            days_count=normalize_days_count(payload.days_count),
            daily_taxes_uah=daily_taxes,
            freight_uah=payload.freight_uah,
            driver_pay_mode=payload.driver_pay_mode,
            driver_pay_uah=payload.driver_pay_uah,
            driver_pay_uah_per_day=payload.driver_pay_uah_per_day,
            extra_costs_uah=payload.extra_costs_uah,
        )

    @staticmethod
    def apply_snapshot(trip: Trip, trip_input: TripInput, metrics: TripMetrics) -> None:
        """Copy the calculator input and its metrics onto a trip row."""
        trip.vehicle_id = trip_input.vehicle_id
        trip.name = trip_input.name
        trip.trip_date = trip_input.trip_date
        trip.trip_type = trip_input.trip_type
        trip.notes = trip_input.notes

        trip.start_odometer_km = trip_input.start_odometer_km
        trip.end_odometer_km = trip_input.end_odometer_km
        trip.fuel_consumption_l_per_100km = trip_input.fuel_consumption_l_per_100km
        trip.fuel_price_uah_per_l = trip_input.fuel_price_uah_per_l
        trip.depreciation_uah_per_km = trip_input.depreciation_uah_per_km
        trip.days_count = trip_input.days_count
        trip.daily_taxes_uah = trip_input.daily_taxes_uah
        trip.freight_uah = trip_input.freight_uah or 0
        trip.driver_pay_mode = trip_input.driver_pay_mode
        trip.driver_pay_uah = trip_input.driver_pay_uah or 0
        trip.driver_pay_uah_per_day = trip_input.driver_pay_uah_per_day or 0
        trip.extra_costs_uah = trip_input.extra_costs_uah or 0

        for field, value in metrics.model_dump().items():
            setattr(trip, field, value)

    @staticmethod
    async def preview_trip_metrics(db: AsyncSession, user_id: str, payload: TripFields) -> TripMetrics:
        """
        Compute metrics for an unsaved trip form.

        Raises:
            TripValidationError: If the odometer readings are out of order
        """
        vehicle = None
        vehicle_id = getattr(payload, "vehicle_id", None)
        if vehicle_id is not None:
            vehicle = await TripService.get_owned_vehicle(db, user_id, vehicle_id)

        trip_input = TripService.build_trip_input(payload, user_id, vehicle)
        return calculate_trip_metrics(trip_input)

    @staticmethod
    async def create_trip(db: AsyncSession, user_id: str, payload: TripCreate) -> Trip:
        """
        Create a trip with its metrics snapshot.

        Raises:
            ResourceNotFoundError: If the vehicle is not the user's
            TripValidationError: If the odometer readings are out of order
        """
        vehicle = await TripService.get_owned_vehicle(db, user_id, payload.vehicle_id)
        trip_input = TripService.build_trip_input(payload, user_id, vehicle)
        metrics = calculate_trip_metrics(trip_input)

        trip = Trip(user_id=user_id)
        TripService.apply_snapshot(trip, trip_input, metrics)

        db.add(trip)
        await db.commit()
        await db.refresh(trip)

        logger.info(
            "Trip created",
            extra={"trip_id": trip.id, "user_id": user_id, "profit_uah": metrics.profit_uah},
        )

        await log_event(
            db=db,
            action=AuditAction.TRIP_CREATED,
            actor_id=user_id,
            entity_type="trip",
            entity_id=trip.id,
            metadata={
                "vehicle_id": trip.vehicle_id,
                "distance_km": metrics.distance_km,
                "profit_uah": metrics.profit_uah,
                "status": metrics.status.value,
            }
        )

        return trip

    @staticmethod
    async def update_trip(db: AsyncSession, user_id: str, trip_id: int, payload: TripCreate) -> Trip:
        """
        Replace a trip's inputs and recompute its snapshot.

        Raises:
            ResourceNotFoundError: If the trip or vehicle is not the user's
            TripValidationError: If the odometer readings are out of order
        """
        trip = await TripService.get_trip(db, user_id, trip_id)
        vehicle = await TripService.get_owned_vehicle(db, user_id, payload.vehicle_id)
        trip_input = TripService.build_trip_input(payload, user_id, vehicle)
        metrics = calculate_trip_metrics(trip_input)

        TripService.apply_snapshot(trip, trip_input, metrics)

        await db.commit()
        await db.refresh(trip)

        logger.info("Trip updated", extra={"trip_id": trip.id, "user_id": user_id})

        await log_event(
            db=db,
            action=AuditAction.TRIP_UPDATED,
            actor_id=user_id,
            entity_type="trip",
            entity_id=trip.id,
            metadata={
                "profit_uah": metrics.profit_uah,
                "status": metrics.status.value,
            }
        )

        return trip

    @staticmethod
    async def delete_trip(db: AsyncSession, user_id: str, trip_id: int) -> None:
        trip = await TripService.get_trip(db, user_id, trip_id)

        await db.delete(trip)
        await db.commit()

        logger.info("Trip deleted", extra={"trip_id": trip_id, "user_id": user_id})

        await log_event(
            db=db,
            action=AuditAction.TRIP_DELETED,
            actor_id=user_id,
            entity_type="trip",
            entity_id=trip_id,
        )
