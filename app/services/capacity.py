"""Occupancy calculations"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.order import Order, OrderStatus
from app.models.reservation import Reservation, ACTIVE_STATUSES
from app.models.table import Table
from app.services.clock import Clock, SystemClock

_EPOCH = datetime(1970, 1, 1)


class CapacityMonitor:
    """Guests seated or about to be seated, as a share of total seating.

    Always recomputed from the store; an over-booking must never be accepted
    on stale numbers.
    """

    def __init__(
        self,
        db: AsyncSession,
        clock: Optional[Clock] = None,
        buffer_minutes: int = None,
        threshold_percent: float = None,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        if buffer_minutes is None:
            buffer_minutes = settings.reservation_buffer_minutes
        if threshold_percent is None:
            threshold_percent = settings.reservation_capacity_threshold_percent
        self.buffer = timedelta(minutes=buffer_minutes)
        self.threshold_percent = threshold_percent

    async def total_capacity(self) -> int:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Table.capacity), 0)).where(Table.is_active.is_(True))
        )
        return int(result.scalar() or 0)

    async def reserved_guests(self, at: datetime) -> int:
        """Guests of active reservations whose window brackets ``at``"""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Reservation.number_of_guests), 0)).where(
                Reservation.status.in_(ACTIVE_STATUSES),
                Reservation.reservation_time > at - self.buffer,
                Reservation.reservation_time < at + self.buffer,
            )
        )
        return int(result.scalar() or 0)

    async def walk_in_guests(self) -> int:
        """Guests of open orders that did not come from a reservation"""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Order.number_of_guests), 0)).where(
                Order.status == OrderStatus.OPEN.value,
                Order.reservation_id.is_(None),
            )
        )
        return int(result.scalar() or 0)

    async def current_capacity_percent(self) -> float:
        total = await self.total_capacity()
        if total <= 0:
            return 0.0
        guests = await self.reserved_guests(self.clock.now()) + await self.walk_in_guests()
        return max(0.0, min(100.0, guests * 100.0 / total))

    async def projected_capacity_percent(self, at: datetime, extra_guests: int = 0) -> float:
        """Occupancy around ``at`` if ``extra_guests`` were booked too; not clamped"""
        total = await self.total_capacity()
        if total <= 0:
            return float("inf") if extra_guests > 0 else 0.0
        guests = await self.reserved_guests(at) + extra_guests
        return guests * 100.0 / total

    async def would_exceed(self, at: datetime, guests: int) -> bool:
        projected = await self.projected_capacity_percent(at, extra_guests=guests)
        return projected > self.threshold_percent

    def slot_keys(self, at: datetime) -> List[int]:
        """Buffer-wide time slots that any booking sharing capacity with ``at`` also touches.

        Two bookings count against each other only when they are less than one
        buffer apart, so their slot numbers differ by at most one and the
        returned neighbourhoods always intersect.
        """
        slot = (at - _EPOCH) // self.buffer
        return [slot - 1, slot, slot + 1]
