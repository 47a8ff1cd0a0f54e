"""
Trip Metrics Calculator (Domain Logic).

Turns raw trip inputs (odometer readings, fuel and depreciation rates,
day count, driver pay scheme, freight income) into the derived cost and
profitability figures stored on every trip.

Pure and synchronous: no I/O, no logging, no shared state. Called with the
same input from trip creation, trip update and the live preview.
"""

import math
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from backend.app.models.trip_enums import DriverPayMode, TripStatus, TripType


ODOMETER_ORDER_ERROR = "end_odometer_km cannot be less than start_odometer_km"


class TripValidationError(ValueError):
    """Raised when trip inputs violate the odometer ordering invariant."""

    def __init__(self, message: str = ODOMETER_ORDER_ERROR, field: str = "end_odometer_km"):
        self.message = message
        self.field = field
        super().__init__(message)


class TripInput(BaseModel):
    """
    Caller-supplied trip inputs.

    Rate and amount fields are deliberately unconstrained: nulls and
    negatives are normalised by the calculator instead of rejected, so a
    half-filled form still yields a preview.
    """
    model_config = ConfigDict(frozen=True)

    # Pass-through metadata, not used in the arithmetic
    user_id: Optional[str] = None
    vehicle_id: Optional[int] = None
    name: Optional[str] = None
    trip_date: Optional[date] = None
    trip_type: Optional[TripType] = None
    notes: Optional[str] = None

    start_odometer_km: Optional[float] = None
    end_odometer_km: Optional[float] = None
    fuel_consumption_l_per_100km: Optional[float] = None
    fuel_price_uah_per_l: Optional[float] = None
    depreciation_uah_per_km: Optional[float] = None
    days_count: Optional[int] = None
    daily_taxes_uah: Optional[float] = None
    freight_uah: Optional[float] = None
    driver_pay_mode: Optional[DriverPayMode] = None
    driver_pay_uah: Optional[float] = None
    driver_pay_uah_per_day: Optional[float] = None
    extra_costs_uah: Optional[float] = None


class TripMetrics(BaseModel):
    """Derived trip figures, each rounded to 2 decimals."""
    model_config = ConfigDict(frozen=True)

    distance_km: float
    fuel_used_l: float
    fuel_cost_uah: float
    depreciation_cost_uah: float
    taxes_cost_uah: float
    driver_cost_uah: float
    total_costs_uah: float
    profit_uah: float
    profit_per_km_uah: float
    roi_percent: float
    status: TripStatus


def round2(value: float) -> float:
    """
    Round to 2 decimals with ties going up, on the scaled double.

    Infinities and NaN pass through unchanged.
    """
    scaled = value * 100
    if not math.isfinite(scaled):
        return scaled / 100
    whole = math.floor(scaled)
    # compare the fraction directly; adding 0.5 first can carry into the next integer
    return (whole + 1 if scaled - whole >= 0.5 else whole) / 100


def ensure_non_negative(value: Optional[float]) -> float:
    """Treat missing and negative amounts as zero."""
    if value is None:
        return 0.0
    return max(0.0, float(value))


def normalize_days_count(value: Optional[int]) -> int:
    if value is None or value < 1:
        return 1
    return int(value)


def classify_profit(profit_uah: float) -> TripStatus:
    if profit_uah > 0:
        return TripStatus.PROFIT
    if profit_uah == 0:
        return TripStatus.BREAKEVEN
    return TripStatus.LOSS


def calculate_trip_metrics(trip: TripInput) -> TripMetrics:
    """
    Calculate the cost and profitability metrics of a trip.

    Every intermediate figure is rounded as soon as it is computed, and the
    rounded value feeds the next stage.

    Args:
        trip: Trip inputs

    Returns:
        Freshly computed TripMetrics

    Raises:
        TripValidationError: If end_odometer_km is less than start_odometer_km
    """
    start = trip.start_odometer_km if trip.start_odometer_km is not None else 0.0
    end = trip.end_odometer_km if trip.end_odometer_km is not None else 0.0

    if end < start:
        raise TripValidationError()

    days_count = normalize_days_count(trip.days_count)
    fuel_consumption = ensure_non_negative(trip.fuel_consumption_l_per_100km)
    fuel_price = ensure_non_negative(trip.fuel_price_uah_per_l)
    depreciation_per_km = ensure_non_negative(trip.depreciation_uah_per_km)
    daily_taxes = ensure_non_negative(trip.daily_taxes_uah)
    freight = ensure_non_negative(trip.freight_uah)
    driver_pay = ensure_non_negative(trip.driver_pay_uah)
    driver_pay_per_day = ensure_non_negative(trip.driver_pay_uah_per_day)
    extra_costs = ensure_non_negative(trip.extra_costs_uah)

    distance_km = round2(end - start)
    fuel_used_l = round2(distance_km * fuel_consumption / 100)
    fuel_cost_uah = round2(fuel_used_l * fuel_price)
    depreciation_cost_uah = round2(distance_km * depreciation_per_km)
    taxes_cost_uah = round2(daily_taxes * days_count)

    driver_pay_mode = trip.driver_pay_mode or DriverPayMode.PER_TRIP
    if driver_pay_mode == DriverPayMode.PER_DAY:
        driver_cost_uah = round2(driver_pay_per_day * days_count)
    else:
        driver_cost_uah = round2(driver_pay)

    total_costs_uah = round2(
        fuel_cost_uah
        + depreciation_cost_uah
        + taxes_cost_uah
        + driver_cost_uah
        + extra_costs
    )

    income_uah = freight
    profit_uah = round2(income_uah - total_costs_uah)
    profit_per_km_uah = round2(profit_uah / distance_km) if distance_km > 0 else 0.0
    roi_percent = round2(profit_uah / total_costs_uah * 100) if total_costs_uah > 0 else 0.0

    return TripMetrics(
        distance_km=distance_km,
        fuel_used_l=fuel_used_l,
        fuel_cost_uah=fuel_cost_uah,
        depreciation_cost_uah=depreciation_cost_uah,
        taxes_cost_uah=taxes_cost_uah,
        driver_cost_uah=driver_cost_uah,
        total_costs_uah=total_costs_uah,
        profit_uah=profit_uah,
        profit_per_km_uah=profit_per_km_uah,
        roi_percent=roi_percent,
        status=classify_profit(profit_uah),
    )
