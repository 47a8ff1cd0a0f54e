"""
Trip database model.

A trip stores both the inputs it was saved with and the metrics computed
from them, so listings and reports never recompute.
"""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Enum, ForeignKey, Text
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.trip_enums import TripType, DriverPayMode, TripStatus


class Trip(Base):
    """
    Trip model.

    Inputs are kept as submitted (nulls included); the metric columns are a
    snapshot taken at the last create or update.
    """
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Ownership
    user_id = Column(String(100), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey('vehicles.id', ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(500), nullable=True)
    trip_date = Column(Date, nullable=False, index=True)
    trip_type = Column(Enum(TripType), default=TripType.RAW, nullable=False)
    notes = Column(Text, nullable=True)

    # Inputs
    start_odometer_km = Column(Float, nullable=True)
    end_odometer_km = Column(Float, nullable=True)
    fuel_consumption_l_per_100km = Column(Float, nullable=True)
    fuel_price_uah_per_l = Column(Float, nullable=True)
    depreciation_uah_per_km = Column(Float, nullable=True)
    days_count = Column(Integer, default=1, nullable=False)
    daily_taxes_uah = Column(Float, nullable=False)
    freight_uah = Column(Float, default=0, nullable=False)
    driver_pay_mode = Column(Enum(DriverPayMode), default=DriverPayMode.PER_TRIP, nullable=False)
    driver_pay_uah = Column(Float, default=0, nullable=False)
    driver_pay_uah_per_day = Column(Float, default=0, nullable=False)
    extra_costs_uah = Column(Float, default=0, nullable=False)

    # Metrics snapshot
    distance_km = Column(Float, nullable=True)
    fuel_used_l = Column(Float, nullable=True)
    fuel_cost_uah = Column(Float, nullable=True)
    depreciation_cost_uah = Column(Float, nullable=True)
    taxes_cost_uah = Column(Float, nullable=True)
    driver_cost_uah = Column(Float, nullable=True)
    total_costs_uah = Column(Float, nullable=True)
    profit_uah = Column(Float, nullable=True, index=True)
    profit_per_km_uah = Column(Float, nullable=True)
    roi_percent = Column(Float, nullable=True)
    status = Column(Enum(TripStatus), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Trip(id={self.id}, vehicle_id={self.vehicle_id}, trip_date={self.trip_date})>"
