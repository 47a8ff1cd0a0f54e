"""
Trip schemas.

Schemas for trip creation, update, live preview and listing.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime

from backend.app.models.trip_enums import TripType, DriverPayMode, TripStatus


# Largest magnitude accepted for any distance, rate or amount.
MAX_AMOUNT = 1e9
MAX_DAYS_COUNT = 3650


class TripFields(BaseModel):
    """
    Numeric trip inputs shared by every trip payload.

    Signs are left open here; the calculator normalises nulls and negatives.
    Magnitudes are bounded and infinities or NaN are rejected.
    """
    start_odometer_km: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    end_odometer_km: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    fuel_consumption_l_per_100km: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    fuel_price_uah_per_l: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    depreciation_uah_per_km: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    days_count: Optional[int] = Field(None, le=MAX_DAYS_COUNT)
    daily_taxes_uah: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    freight_uah: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    driver_pay_mode: DriverPayMode = DriverPayMode.PER_TRIP
    driver_pay_uah: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    driver_pay_uah_per_day: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    extra_costs_uah: Optional[float] = Field(None, ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)


class TripCreate(TripFields):
    """Schema for creating or replacing a trip."""
    name: str = Field(..., min_length=1, max_length=500, description="Trip name")
    trip_date: date
    vehicle_id: int
    trip_type: TripType
    notes: Optional[str] = Field(None, max_length=2000)

    start_odometer_km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    end_odometer_km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    fuel_consumption_l_per_100km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    fuel_price_uah_per_l: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    depreciation_uah_per_km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    daily_taxes_uah: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    freight_uah: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    driver_pay_uah: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    driver_pay_uah_per_day: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    extra_costs_uah: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Trip name must not be blank")
        return value

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class TripPreviewRequest(TripFields):
    """Partially filled trip form sent for a live, unsaved calculation."""
    vehicle_id: Optional[int] = None
    trip_type: Optional[TripType] = None


class TripResponse(BaseModel):
    """Schema for trip response, inputs plus the stored metrics snapshot."""
    id: int
    user_id: str
    vehicle_id: int
    name: Optional[str]
    trip_date: date
    trip_type: TripType
    notes: Optional[str]

    start_odometer_km: Optional[float]
    end_odometer_km: Optional[float]
    fuel_consumption_l_per_100km: Optional[float]
    fuel_price_uah_per_l: Optional[float]
    depreciation_uah_per_km: Optional[float]
    days_count: int
    daily_taxes_uah: float
    freight_uah: float
    driver_pay_mode: DriverPayMode
    driver_pay_uah: float
    driver_pay_uah_per_day: float
    extra_costs_uah: float

    distance_km: Optional[float]
    fuel_used_l: Optional[float]
    fuel_cost_uah: Optional[float]
    depreciation_cost_uah: Optional[float]
    taxes_cost_uah: Optional[float]
    driver_cost_uah: Optional[float]
    total_costs_uah: Optional[float]
    profit_uah: Optional[float]
    profit_per_km_uah: Optional[float]
    roi_percent: Optional[float]
    status: Optional[TripStatus]

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripFilters(BaseModel):
    """Filters applied to the trip list."""
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    vehicle_id: Optional[int] = None
    status: Optional[TripStatus] = None


class TripTotals(BaseModel):
    """Sums and averages over a trip selection."""
    trips_count: int
    sum_freight_uah: float
    sum_fuel_cost_uah: float
    sum_driver_cost_uah: float
    sum_total_costs_uah: float
    sum_profit_uah: float
    avg_profit_per_km_uah: Optional[float]
    avg_roi_percent: Optional[float]


class TripListResponse(BaseModel):
    """Schema for trip list with totals."""
    trips: List[TripResponse]
    total: int
    totals: Optional[TripTotals]
