"""
Trip Reporting Service.

Read-only listing and totals over the stored metrics snapshots.
Nothing here calls the calculator.
"""

from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from backend.app.domain.trips.calculator import round2
from backend.app.models.trip import Trip
from backend.app.models.trip_enums import TripStatus
from backend.app.schemas.trip import TripFilters, TripTotals


def _average(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return round2(sum(values) / len(values))


class TripReportingService:

    @staticmethod
    async def list_trips(db: AsyncSession, user_id: str, filters: TripFilters) -> List[Trip]:
        """
        List the user's trips, newest trip date first.

        The status filter follows the sign of the stored profit, with a
        missing profit counted as zero.
        """
        query = select(Trip).where(Trip.user_id == user_id)

        if filters.date_from:
            query = query.where(Trip.trip_date >= filters.date_from)
        if filters.date_to:
            query = query.where(Trip.trip_date <= filters.date_to)
        if filters.vehicle_id is not None:
            query = query.where(Trip.vehicle_id == filters.vehicle_id)

        if filters.status:
            profit = func.coalesce(Trip.profit_uah, 0)
            if filters.status == TripStatus.PROFIT:
                query = query.where(profit > 0)
            elif filters.status == TripStatus.BREAKEVEN:
                query = query.where(profit == 0)
            else:
                query = query.where(profit < 0)

        query = query.order_by(Trip.trip_date.desc(), Trip.id.desc())

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    def summarize(trips: Iterable[Trip]) -> Optional[TripTotals]:
        """
        Sum and average the snapshot figures of a trip selection.

        Averages only count trips that have the figure; None for an empty
        selection.
        """
        trips = list(trips)
        if not trips:
            return None

        profit_per_km = [t.profit_per_km_uah for t in trips if t.profit_per_km_uah is not None]
        roi = [t.roi_percent for t in trips if t.roi_percent is not None]

        return TripTotals(
            trips_count=len(trips),
            sum_freight_uah=round2(sum(t.freight_uah or 0 for t in trips)),
            sum_fuel_cost_uah=round2(sum(t.fuel_cost_uah or 0 for t in trips)),
            sum_driver_cost_uah=round2(sum(t.driver_cost_uah or 0 for t in trips)),
            sum_total_costs_uah=round2(sum(t.total_costs_uah or 0 for t in trips)),
            sum_profit_uah=round2(sum(t.profit_uah or 0 for t in trips)),
            avg_profit_per_km_uah=_average(profit_per_km),
            avg_roi_percent=_average(roi),
        )
