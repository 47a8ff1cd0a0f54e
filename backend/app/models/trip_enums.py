"""
Trip and vehicle enumerations.
"""

import enum


class VehicleType(str, enum.Enum):
    """Vehicle type enumeration."""
    VAN = "van"
    TRUCK = "truck"


class TripType(str, enum.Enum):
    """
    Trip type enumeration.

    Informational only for the metrics calculation: commerce trips are shown
    with profit and ROI, raw-material trips with cost per unit.
    """
    RAW = "raw"  # Raw material delivery
    COMMERCE = "commerce"  # Freight paid by a customer


class DriverPayMode(str, enum.Enum):
    """Driver pay mode enumeration."""
    PER_TRIP = "per_trip"  # Flat amount for the whole trip
    PER_DAY = "per_day"  # Daily rate multiplied by days_count


class TripStatus(str, enum.Enum):
    """Profitability status derived from the sign of profit_uah."""
    PROFIT = "profit"
    BREAKEVEN = "breakeven"
    LOSS = "loss"
