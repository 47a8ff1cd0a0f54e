"""
Vehicle Pydantic schemas.

Defines request and response models for vehicle management.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List

from backend.app.models.trip_enums import VehicleType
from backend.app.schemas.trip import MAX_AMOUNT


class VehicleCreate(BaseModel):
    """
    Schema for registering a new vehicle.

    Default rates left out of the request are taken from the vehicle type;
    rates sent as null stay empty.
    """
    name: str = Field(..., min_length=1, max_length=200, description="Vehicle display name")
    type: VehicleType = Field(VehicleType.VAN, description="Vehicle type (van or truck)")

    default_fuel_consumption_l_per_100km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Fuel consumption in L/100km")
    default_depreciation_uah_per_km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Depreciation in UAH per km")
    default_daily_taxes_uah: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Daily taxes in UAH")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Vehicle name must not be blank")
        return value


class VehicleUpdate(BaseModel):
    """Schema for updating an existing vehicle."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[VehicleType] = None
    default_fuel_consumption_l_per_100km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    default_depreciation_uah_per_km: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    default_daily_taxes_uah: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Vehicle name must not be blank")
        return value


class VehicleResponse(BaseModel):
    """Schema for vehicle response."""
    id: int
    user_id: str
    name: str
    type: VehicleType
    default_fuel_consumption_l_per_100km: Optional[float]
    default_depreciation_uah_per_km: Optional[float]
    default_daily_taxes_uah: Optional[float]
    created_at: datetime

    class Config:
        from_attributes = True


class VehicleListResponse(BaseModel):
    """Schema for vehicle list."""
    vehicles: List[VehicleResponse]
    total: int


class VehicleTypeDefaults(BaseModel):
    """Default rates suggested for a vehicle type."""
    type: VehicleType
    fuel_consumption_l_per_100km: float
    daily_taxes_uah: float
    depreciation_uah_per_km: float
