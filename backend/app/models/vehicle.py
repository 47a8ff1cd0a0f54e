"""
Vehicle database model.

Vehicles carry the default cost rates that pre-fill new trips.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.trip_enums import VehicleType


class Vehicle(Base):
    """
    Vehicle model.

    A vehicle belongs to a single user. Its default rates are copied into a
    trip's inputs when the trip payload leaves them empty.
    """
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Ownership - user id as provided by the gateway
    user_id = Column(String(100), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    type = Column(Enum(VehicleType), default=VehicleType.VAN, nullable=False)

    # Default cost rates
    default_fuel_consumption_l_per_100km = Column(Float, nullable=True)
    default_depreciation_uah_per_km = Column(Float, nullable=True)
    default_daily_taxes_uah = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Vehicle(id={self.id}, name='{self.name}', type='{self.type.value}')>"
