"""
Per vehicle type cost defaults.

Used to pre-fill a vehicle's defaults when it is registered without them.
"""

from backend.app.models.trip_enums import VehicleType


VEHICLE_TYPE_DEFAULTS = {
    VehicleType.VAN: {
        "fuel_consumption_l_per_100km": 12.0,
        "daily_taxes_uah": 150.0,
        "depreciation_uah_per_km": 1.2,
    },
    VehicleType.TRUCK: {
        "fuel_consumption_l_per_100km": 30.0,
        "daily_taxes_uah": 300.0,
        "depreciation_uah_per_km": 7.0,
    },
}
