"""Order models"""

import enum
import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from app.database import Base


class OrderStatus(str, enum.Enum):
    """Dine-in order status"""
    OPEN = "open"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Order(Base):
    """Dine-in orders, opened at the table by staff or on reservation arrival"""
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_number = Column(String(30), unique=True, nullable=False)
    reservation_id = Column(Uuid, index=True)  # reservations.order_id holds the foreign key
    customer_id = Column(Uuid, ForeignKey("customers.id"))

    number_of_guests = Column(Integer, nullable=False, default=1)
    status = Column(String(20), nullable=False, default=OrderStatus.OPEN.value)
    notes = Column(Text)

    created_by = Column(Uuid, ForeignKey("users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    tables = relationship("OrderTable", cascade="all, delete-orphan", lazy="selectin")

    @classmethod
    def for_reservation(
        cls,
        order_number: str,
        reservation,
        created_by: Optional[uuid.UUID] = None,
    ) -> "Order":
        """Open an order for a guest party that just arrived"""
        return cls(
            id=uuid.uuid4(),
            order_number=order_number,
            reservation_id=reservation.id,
            customer_id=reservation.customer_id,
            number_of_guests=reservation.number_of_guests,
            status=OrderStatus.OPEN.value,
            notes=reservation.notes,
            created_by=created_by,
        )


class OrderTable(Base):
    """Tables an order is seated at"""
    __tablename__ = "order_tables"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    table_id = Column(Uuid, ForeignKey("restaurant_tables.id"), nullable=False)
