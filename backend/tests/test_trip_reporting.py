"""
Unit tests for trip totals over stored snapshots.
"""

from types import SimpleNamespace

from backend.app.services.trip_reporting import TripReportingService


def snapshot(**values):
    base = dict(
        freight_uah=0,
        fuel_cost_uah=0,
        driver_cost_uah=0,
        total_costs_uah=0,
        profit_uah=0,
        profit_per_km_uah=None,
        roi_percent=None,
    )
    base.update(values)
    return SimpleNamespace(**base)


def test_empty_selection_has_no_totals():
    assert TripReportingService.summarize([]) is None


def test_sums_and_averages():
    totals = TripReportingService.summarize([
        snapshot(freight_uah=10000, fuel_cost_uah=500, driver_cost_uah=500,
                 total_costs_uah=1350, profit_uah=8650, profit_per_km_uah=86.5, roi_percent=640.74),
        snapshot(freight_uah=1000, fuel_cost_uah=500, driver_cost_uah=500,
                 total_costs_uah=1350, profit_uah=-350, profit_per_km_uah=-3.5, roi_percent=-25.94),
    ])

    assert totals.trips_count == 2
    assert totals.sum_freight_uah == 11000
    assert totals.sum_fuel_cost_uah == 1000
    assert totals.sum_driver_cost_uah == 1000
    assert totals.sum_total_costs_uah == 2700
    assert totals.sum_profit_uah == 8300
    assert totals.avg_profit_per_km_uah == 41.5
    assert totals.avg_roi_percent == 307.4


def test_averages_skip_missing_values():
    totals = TripReportingService.summarize([
        snapshot(profit_per_km_uah=10, roi_percent=None),
        snapshot(profit_per_km_uah=None, roi_percent=None, freight_uah=None, profit_uah=None),
    ])

    assert totals.avg_profit_per_km_uah == 10
    assert totals.avg_roi_percent is None
    assert totals.sum_freight_uah == 0
    assert totals.sum_profit_uah == 0
