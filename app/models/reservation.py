"""Reservation models"""

import enum
import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Uuid, CheckConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ARRIVED = "arrived"
    CANCELLED = "cancelled"


# Statuses that hold a table
ACTIVE_STATUSES = (
    ReservationStatus.PENDING.value,
    ReservationStatus.CONFIRMED.value,
    ReservationStatus.ARRIVED.value,
)

# Statuses that may still be cancelled or swept
OPEN_STATUSES = (
    ReservationStatus.PENDING.value,
    ReservationStatus.CONFIRMED.value,
)


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("number_of_guests BETWEEN 1 AND 20", name="ck_reservations_guests"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reservation_number = Column(String(20), unique=True, nullable=False)
    customer_id = Column(Uuid, ForeignKey("customers.id"))

    # Reservation details
    number_of_guests = Column(Integer, nullable=False)
    reservation_time = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, index=True)
    notes = Column(Text)
    preferred_area = Column(String(50))

    # Cancellation (only set when status == cancelled)
    cancel_reason = Column(String(500))
    cancelled_at = Column(DateTime)

    # Order materialized on arrival (only set when status == arrived)
    order_id = Column(Uuid, ForeignKey("orders.id"))

    # Email tracking
    confirmed_at = Column(DateTime)
    confirmation_sent = Column(DateTime)
    reminder_sent = Column(DateTime)

    # Metadata
    created_by = Column(Uuid, ForeignKey("users.id"))
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    customer = relationship("Customer", lazy="joined")
    tables = relationship(
        "ReservationTable",
        cascade="all, delete-orphan",
        order_by="ReservationTable.sort_order",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    @classmethod
    def new_pending(
        cls,
        reservation_number: str,
        number_of_guests: int,
        reservation_time: datetime,
        customer_id: Optional[uuid.UUID] = None,
        notes: Optional[str] = None,
        preferred_area: Optional[str] = None,
        created_by: Optional[uuid.UUID] = None,
    ) -> "Reservation":
        """Build a fresh pending reservation with every lifecycle field explicit"""
        return cls(
            id=uuid.uuid4(),
            reservation_number=reservation_number,
            customer_id=customer_id,
            number_of_guests=number_of_guests,
            reservation_time=reservation_time,
            status=ReservationStatus.PENDING.value,
            notes=notes,
            preferred_area=preferred_area,
            cancel_reason=None,
            cancelled_at=None,
            order_id=None,
            confirmed_at=None,
            confirmation_sent=None,
            reminder_sent=None,
            created_by=created_by,
        )

    @property
    def table_ids(self) -> list:
        return [link.table_id for link in self.tables]


class ReservationTable(Base):
    """Tables assigned to a reservation"""
    __tablename__ = "reservation_tables"

    reservation_id = Column(Uuid, ForeignKey("reservations.id", ondelete="CASCADE"), primary_key=True)
    table_id = Column(Uuid, ForeignKey("restaurant_tables.id"), primary_key=True, index=True)
    sort_order = Column(Integer)

    table = relationship("Table", lazy="joined")
