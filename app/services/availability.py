"""Table availability checks"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Set
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.reservation import Reservation, ReservationTable, ACTIVE_STATUSES


class AvailabilityChecker:
    """Detects time-window conflicts between existing and candidate bookings.

    Reservations carry no duration. A booking blocks its tables for
    ``buffer_minutes`` on either side of its reservation time.
    """

    def __init__(self, db: AsyncSession, buffer_minutes: int = None):
        self.db = db
        if buffer_minutes is None:
            buffer_minutes = settings.reservation_buffer_minutes
        self.buffer = timedelta(minutes=buffer_minutes)

    def window(self, at: datetime):
        """Open interval of reservation times that conflict with ``at``"""
        return at - self.buffer, at + self.buffer

    async def busy_table_ids(
        self,
        at: datetime,
        table_ids: Optional[Iterable[UUID]] = None,
    ) -> Set[UUID]:
        """Return the ids of tables held by an active reservation near ``at``"""
        start, end = self.window(at)
        query = (
            select(ReservationTable.table_id)
            .join(Reservation, Reservation.id == ReservationTable.reservation_id)
            .where(
                Reservation.status.in_(ACTIVE_STATUSES),
                Reservation.reservation_time > start,
                Reservation.reservation_time < end,
            )
        )
        if table_ids is not None:
            query = query.where(ReservationTable.table_id.in_(list(table_ids)))

        result = await self.db.execute(query)
        return set(result.scalars().all())

    async def is_available(self, table_id: UUID, at: datetime) -> bool:
        busy = await self.busy_table_ids(at, table_ids=[table_id])
        return table_id not in busy
