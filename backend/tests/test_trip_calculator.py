"""
Unit tests for the trip metrics calculator.
"""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from backend.app.domain.trips.calculator import (
    TripInput,
    TripValidationError,
    calculate_trip_metrics,
    ensure_non_negative,
    normalize_days_count,
    round2,
)
from backend.app.models.trip_enums import DriverPayMode, TripStatus, TripType


def make_input(**overrides) -> TripInput:
    values = dict(
        user_id="u1",
        vehicle_id=1,
        trip_date=date(2025, 2, 2),
        trip_type=TripType.RAW,
        start_odometer_km=0,
        end_odometer_km=100,
        fuel_consumption_l_per_100km=10,
        fuel_price_uah_per_l=50,
        depreciation_uah_per_km=2,
        days_count=1,
        daily_taxes_uah=150,
        freight_uah=10000,
        driver_pay_mode=DriverPayMode.PER_TRIP,
        driver_pay_uah=500,
        extra_costs_uah=0,
    )
    values.update(overrides)
    return TripInput(**values)


def decimals(value: float) -> int:
    return len(str(value).split(".")[1]) if "." in str(value) else 0


def test_regular_trip():
    m = calculate_trip_metrics(make_input())

    assert m.distance_km == 100
    assert m.fuel_used_l == 10
    assert m.fuel_cost_uah == 500
    assert m.depreciation_cost_uah == 200
    assert m.taxes_cost_uah == 150
    assert m.driver_cost_uah == 500
    assert m.total_costs_uah == 1350
    assert m.profit_uah == 8650
    assert m.profit_per_km_uah == 86.5
    assert m.roi_percent == 640.74
    assert m.status == TripStatus.PROFIT


def test_zero_distance():
    m = calculate_trip_metrics(make_input(start_odometer_km=100, end_odometer_km=100))

    assert m.distance_km == 0
    assert m.fuel_used_l == 0
    assert m.fuel_cost_uah == 0
    assert m.depreciation_cost_uah == 0
    assert m.profit_per_km_uah == 0
    assert m.taxes_cost_uah == 150
    assert m.driver_cost_uah == 500
    assert m.total_costs_uah == 650
    assert m.profit_uah == 9350
    assert m.roi_percent > 0
    assert m.status == TripStatus.PROFIT


def test_end_before_start_raises():
    with pytest.raises(TripValidationError, match="end_odometer_km cannot be less than start_odometer_km"):
        calculate_trip_metrics(make_input(start_odometer_km=200, end_odometer_km=100))


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        calculate_trip_metrics(make_input(start_odometer_km=5, end_odometer_km=None))


def test_missing_odometers_count_as_zero():
    m = calculate_trip_metrics(make_input(start_odometer_km=None, end_odometer_km=None))

    assert m.distance_km == 0
    assert m.profit_per_km_uah == 0


def test_driver_paid_per_day():
    m = calculate_trip_metrics(make_input(
        driver_pay_mode=DriverPayMode.PER_DAY,
        driver_pay_uah=0,
        driver_pay_uah_per_day=800,
        days_count=3,
    ))

    assert m.driver_cost_uah == 2400
    assert m.taxes_cost_uah == 450
    assert m.total_costs_uah == 3550


def test_per_trip_mode_ignores_daily_rate():
    m = calculate_trip_metrics(make_input(driver_pay_uah_per_day=800, days_count=3))

    assert m.driver_cost_uah == 500


def test_missing_pay_mode_defaults_to_per_trip():
    m = calculate_trip_metrics(make_input(driver_pay_mode=None, driver_pay_uah_per_day=800))

    assert m.driver_cost_uah == 500


def test_zero_costs_give_zero_roi():
    m = calculate_trip_metrics(make_input(
        fuel_consumption_l_per_100km=0,
        fuel_price_uah_per_l=0,
        depreciation_uah_per_km=0,
        days_count=1,
        daily_taxes_uah=0,
        driver_pay_uah=0,
        driver_pay_uah_per_day=0,
        extra_costs_uah=0,
    ))

    assert m.total_costs_uah == 0
    assert m.roi_percent == 0
    assert m.profit_uah == 10000
    assert m.status == TripStatus.PROFIT


def test_rounding_to_two_decimals():
    m = calculate_trip_metrics(make_input(
        start_odometer_km=0,
        end_odometer_km=33.333,
        fuel_consumption_l_per_100km=7.777,
        fuel_price_uah_per_l=49.99,
        depreciation_uah_per_km=1.111,
        days_count=2,
        daily_taxes_uah=100.555,
        driver_pay_uah_per_day=666.666,
        driver_pay_mode=DriverPayMode.PER_DAY,
        driver_pay_uah=0,
        freight_uah=5000,
        extra_costs_uah=10.004,
    ))

    assert m.distance_km == 33.33
    assert m.fuel_used_l == 2.59
    assert m.fuel_cost_uah == 129.47
    assert m.depreciation_cost_uah == 37.03
    assert m.taxes_cost_uah == 201.11
    assert m.driver_cost_uah == 1333.33
    assert m.total_costs_uah == 1710.94
    assert m.profit_uah == 3289.06

    for field, value in m.model_dump(exclude={"status"}).items():
        assert decimals(value) <= 2, f"{field} has more than 2 decimals: {value}"


def test_loss_and_negative_ratios():
    m = calculate_trip_metrics(make_input(freight_uah=1000))

    assert m.profit_uah == -350
    assert m.profit_per_km_uah == -3.5
    assert m.roi_percent == -25.93
    assert m.status == TripStatus.LOSS


def test_breakeven():
    m = calculate_trip_metrics(make_input(freight_uah=1350))

    assert m.profit_uah == 0
    assert m.roi_percent == 0
    assert m.status == TripStatus.BREAKEVEN


def test_negative_and_missing_rates_count_as_zero():
    negative = calculate_trip_metrics(make_input(
        fuel_price_uah_per_l=-50,
        depreciation_uah_per_km=-2,
        daily_taxes_uah=-150,
        driver_pay_uah=-500,
        extra_costs_uah=-10,
        freight_uah=-1,
    ))
    missing = calculate_trip_metrics(make_input(
        fuel_price_uah_per_l=None,
        depreciation_uah_per_km=None,
        daily_taxes_uah=None,
        driver_pay_uah=None,
        extra_costs_uah=None,
        freight_uah=None,
    ))

    assert negative == missing
    assert negative.fuel_used_l == 10
    assert negative.fuel_cost_uah == 0
    assert negative.total_costs_uah == 0
    assert negative.profit_uah == 0
    assert negative.status == TripStatus.BREAKEVEN


@pytest.mark.parametrize("days_count", [None, 0, -3])
def test_days_count_below_one_counts_as_one(days_count):
    m = calculate_trip_metrics(make_input(days_count=days_count))

    assert m.taxes_cost_uah == 150


def test_pass_through_fields_do_not_change_metrics():
    commerce = calculate_trip_metrics(make_input(trip_type=TripType.COMMERCE, name="Kyiv", notes="x"))
    raw = calculate_trip_metrics(make_input())

    assert commerce == raw


def test_repeated_calls_are_identical():
    trip = make_input(end_odometer_km=123.456, fuel_price_uah_per_l=52.39)

    assert calculate_trip_metrics(trip) == calculate_trip_metrics(trip)


def test_input_and_metrics_are_immutable():
    trip = make_input()
    metrics = calculate_trip_metrics(trip)

    with pytest.raises(ValidationError):
        trip.freight_uah = 1
    with pytest.raises(ValidationError):
        metrics.profit_uah = 1


def test_round2_ties_go_up():
    assert round2(0.125) == 0.13
    assert round2(-0.125) == -0.12
    assert round2(2.5) == 2.5
    assert round2(1.005) == 1.0  # 1.005 * 100 is just below 100.5


def test_round2_just_below_half_goes_down():
    assert round2(0.0049999999999999994) == 0.0
    assert round2(-0.0049999999999999994) == 0.0


def test_round2_keeps_non_finite_values():
    assert round2(math.inf) == math.inf
    assert round2(-math.inf) == -math.inf
    assert math.isnan(round2(math.nan))
    assert round2(1e307) == math.inf  # scaling overflows


def test_very_large_odometer_gives_non_finite_metrics():
    metrics = calculate_trip_metrics(make_input(end_odometer_km=1e307))

    assert metrics.distance_km == math.inf
    assert metrics.total_costs_uah == math.inf
    assert metrics.profit_uah == -math.inf
    assert math.isnan(metrics.profit_per_km_uah)
    assert math.isnan(metrics.roi_percent)
    assert metrics.status == TripStatus.LOSS


def test_large_finite_amounts_round_normally():
    metrics = calculate_trip_metrics(make_input(freight_uah=1e9, extra_costs_uah=1e9))

    assert metrics.total_costs_uah == 1000001350
    assert metrics.profit_uah == -1350
    assert metrics.roi_percent == 0


def test_ensure_non_negative():
    assert ensure_non_negative(None) == 0
    assert ensure_non_negative(-1.5) == 0
    assert ensure_non_negative(0) == 0
    assert ensure_non_negative(3.2) == 3.2


def test_normalize_days_count():
    assert normalize_days_count(None) == 1
    assert normalize_days_count(0) == 1
    assert normalize_days_count(4) == 4
