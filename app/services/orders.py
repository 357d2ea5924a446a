"""Order creation for arriving reservations"""

import secrets
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.order import Order, OrderTable
from app.models.table import Table, TableStatus
from app.services.clock import Clock, SystemClock

logger = structlog.get_logger()


class OrderCreator:
    """Opens a dine-in order for a seated party.

    Only flushes; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or SystemClock()

    def generate_order_number(self) -> str:
        stamp = self.clock.now().strftime("%y%m%d%H%M%S")
        return f"ORD{stamp}{secrets.randbelow(100):02d}"

    async def create_for_reservation(
        self,
        reservation,
        tables: List[Table],
        created_by: Optional[UUID] = None,
    ) -> Order:
        order = Order.for_reservation(
            order_number=self.generate_order_number(),
            reservation=reservation,
            created_by=created_by,
        )
        for table in tables:
            order.tables.append(OrderTable(order_id=order.id, table_id=table.id))
            table.status = TableStatus.OCCUPIED.value

        self.db.add(order)
        await self.db.flush()

        logger.info(
            "Order opened for reservation",
            order_number=order.order_number,
            reservation_id=str(reservation.id),
            table_count=len(tables),
        )
        return order
