"""Restaurant table model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Uuid

from app.database import Base


class TableStatus(str, enum.Enum):
    """Physical table status, shared by the reservation and POS flows"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class Table(Base):
    """Dining tables"""
    __tablename__ = "restaurant_tables"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_number = Column(Integer, unique=True, nullable=False)
    table_name = Column(String(50))
    capacity = Column(Integer, nullable=False)
    location = Column(String(100))  # Area tag: Patio, Floor 1, VIP...
    status = Column(String(20), nullable=False, default=TableStatus.AVAILABLE.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.table_name or f"Table {self.table_number}"
